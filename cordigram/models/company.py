from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Uuid, Index
from datetime import datetime
import uuid
from ..core.db import Base


class CompanyStatus:
    """Status values for Company. Sorting on the raw value puts ACTIVE first."""
    ACTIVE = "active"
    PENDING = "pending"


class Company(Base):
    __tablename__ = "companies"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(120), nullable=False)
    # Matching / uniqueness key, see services.normalization.normalize_name
    name_normalized = Column(String, unique=True, index=True, nullable=False)
    status = Column(String(16), default=CompanyStatus.ACTIVE, index=True, nullable=False)
    member_count = Column(Integer, default=0, index=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index("ix_companies_status_member_count", "status", "member_count"),
    )


class CompanyAlias(Base):
    """Alternate display names a company is also known by."""
    __tablename__ = "company_aliases"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Uuid, ForeignKey("companies.id", ondelete="CASCADE"), index=True, nullable=False)
    alias = Column(String(120), nullable=False)
    alias_normalized = Column(String, index=True, nullable=False)
