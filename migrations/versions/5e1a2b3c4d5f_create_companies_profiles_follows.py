"""create companies, company_aliases, profiles and follows tables

Revision ID: 5e1a2b3c4d5f
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5e1a2b3c4d5f'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'companies',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('name_normalized', sa.String(), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False),
        sa.Column('member_count', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_companies_name_normalized'), 'companies', ['name_normalized'], unique=True)
    op.create_index(op.f('ix_companies_status'), 'companies', ['status'], unique=False)
    op.create_index(op.f('ix_companies_member_count'), 'companies', ['member_count'], unique=False)
    op.create_index('ix_companies_status_member_count', 'companies', ['status', 'member_count'], unique=False)

    op.create_table(
        'company_aliases',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('company_id', sa.Uuid(), nullable=False),
        sa.Column('alias', sa.String(length=120), nullable=False),
        sa.Column('alias_normalized', sa.String(), nullable=False),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_company_aliases_company_id'), 'company_aliases', ['company_id'], unique=False)
    op.create_index(op.f('ix_company_aliases_alias_normalized'), 'company_aliases', ['alias_normalized'], unique=False)

    op.create_table(
        'profiles',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('username', sa.String(length=30), nullable=False),
        sa.Column('display_name', sa.String(), nullable=False),
        sa.Column('avatar_url', sa.String(), nullable=False),
        sa.Column('avatar_original_url', sa.String(), nullable=False),
        sa.Column('avatar_public_id', sa.String(), nullable=False),
        sa.Column('avatar_original_public_id', sa.String(), nullable=False),
        sa.Column('cover_url', sa.String(), nullable=False),
        sa.Column('bio', sa.Text(), nullable=False),
        sa.Column('location', sa.String(), nullable=False),
        sa.Column('gender', sa.String(length=32), nullable=False),
        sa.Column('birthdate', sa.Date(), nullable=True),
        sa.Column('workplace_company_id', sa.Uuid(), nullable=True),
        sa.Column('workplace_company_name', sa.String(length=120), nullable=False),
        sa.Column('followers_count', sa.Integer(), nullable=False),
        sa.Column('following_count', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['workplace_company_id'], ['companies.id'], ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_profiles_user_id'), 'profiles', ['user_id'], unique=True)
    op.create_index(op.f('ix_profiles_username'), 'profiles', ['username'], unique=True)
    op.create_index(op.f('ix_profiles_workplace_company_id'), 'profiles', ['workplace_company_id'], unique=False)

    op.create_table(
        'follows',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('follower_id', sa.Uuid(), nullable=False),
        sa.Column('followee_id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('follower_id', 'followee_id', name='uq_follows_edge'),
    )
    op.create_index(op.f('ix_follows_follower_id'), 'follows', ['follower_id'], unique=False)
    op.create_index(op.f('ix_follows_followee_id'), 'follows', ['followee_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_follows_followee_id'), table_name='follows')
    op.drop_index(op.f('ix_follows_follower_id'), table_name='follows')
    op.drop_table('follows')
    op.drop_index(op.f('ix_profiles_workplace_company_id'), table_name='profiles')
    op.drop_index(op.f('ix_profiles_username'), table_name='profiles')
    op.drop_index(op.f('ix_profiles_user_id'), table_name='profiles')
    op.drop_table('profiles')
    op.drop_index(op.f('ix_company_aliases_alias_normalized'), table_name='company_aliases')
    op.drop_index(op.f('ix_company_aliases_company_id'), table_name='company_aliases')
    op.drop_table('company_aliases')
    op.drop_index('ix_companies_status_member_count', table_name='companies')
    op.drop_index(op.f('ix_companies_member_count'), table_name='companies')
    op.drop_index(op.f('ix_companies_status'), table_name='companies')
    op.drop_index(op.f('ix_companies_name_normalized'), table_name='companies')
    op.drop_table('companies')
