"""
Company directory.

Companies are created on first reference by a profile's workplace and are
de-duplicated by their normalized name. Member counts are denormalized
counters bumped by workplace link / unlink.
"""
from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from ..models.company import Company, CompanyAlias, CompanyStatus
from .normalization import normalize_name
from .query_utils import (
    LIKE_ESCAPE,
    as_uuid,
    atomic_increment,
    clamp_limit,
    escape_like,
    insert_ignoring_conflicts,
)

logger = logging.getLogger(__name__)

SUGGEST_STATUSES = (CompanyStatus.ACTIVE, CompanyStatus.PENDING)


def _find_by_normalized(db: Session, normalized: str) -> Optional[Company]:
    return db.query(Company).filter(Company.name_normalized == normalized).first()


def find_company_by_id(db: Session, company_id: Any) -> Optional[Company]:
    company_uuid = as_uuid(company_id)
    if company_uuid is None:
        return None
    return db.get(Company, company_uuid)


def create_or_fetch(db: Session, name: str, normalized: str | None = None) -> Optional[Company]:
    """
    Create an active company for `name`, or return the one already stored
    under the same normalized name.

    Two requests racing on the same normalized name both end up with the
    single stored row: the unique index lets exactly one INSERT through and
    the other becomes a no-op followed by a read of the winner's record.
    An existing row is never modified, so its member_count is untouched.
    """
    normalized = normalized if normalized is not None else normalize_name(name)
    if not normalized:
        return None

    inserted = insert_ignoring_conflicts(
        db,
        Company,
        {
            "name": name.strip(),
            "name_normalized": normalized,
            "status": CompanyStatus.ACTIVE,
            "member_count": 0,
        },
        conflict_columns=["name_normalized"],
    )
    company = _find_by_normalized(db, normalized)

    if inserted:
        logger.info(
            "Company created",
            extra={"company_id": str(company.id), "step": "company_create"},
        )
    else:
        logger.info(
            "Company already exists, reusing stored record",
            extra={"company_id": str(company.id), "step": "company_create_conflict"},
        )
    return company


def ensure_company_by_name(db: Session, name: str | None) -> Optional[Company]:
    """
    Return the company matching `name` by normalized form, creating it if needed.

    Blank / punctuation-only names resolve to None.
    """
    normalized = normalize_name(name)
    if not normalized:
        return None

    existing = _find_by_normalized(db, normalized)
    if existing:
        return existing

    return create_or_fetch(db, name, normalized)


def add_company_alias(db: Session, company: Company, alias: str) -> Optional[CompanyAlias]:
    """Attach an alternate name to a company. Duplicate / blank aliases are ignored."""
    normalized = normalize_name(alias)
    if not normalized or normalized == company.name_normalized:
        return None

    existing = (
        db.query(CompanyAlias)
        .filter(
            CompanyAlias.company_id == company.id,
            CompanyAlias.alias_normalized == normalized,
        )
        .first()
    )
    if existing:
        return existing

    row = CompanyAlias(company_id=company.id, alias=alias.strip(), alias_normalized=normalized)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def _name_order(dialect_name: str):
    # Postgres locale collations ignore spaces; "C" compares by code point like SQLite
    if dialect_name == "postgresql":
        return Company.name_normalized.collate("C").asc()
    return Company.name_normalized.asc()


def _match_companies(
    db: Session,
    pattern: str,
    limit: int,
    exclude_ids: Sequence[UUID] = (),
) -> List[Company]:
    alias_hits = select(CompanyAlias.company_id).where(
        CompanyAlias.alias_normalized.like(pattern, escape=LIKE_ESCAPE)
    )
    query = db.query(Company).filter(
        Company.status.in_(SUGGEST_STATUSES),
        or_(
            Company.name_normalized.like(pattern, escape=LIKE_ESCAPE),
            Company.id.in_(alias_hits),
        ),
    )
    if exclude_ids:
        query = query.filter(Company.id.notin_(list(exclude_ids)))

    return (
        # "active" < "pending", so ascending status lists active companies first
        query.order_by(
            Company.status.asc(),
            Company.member_count.desc(),
            _name_order(db.get_bind().dialect.name),
        )
        .limit(limit)
        .all()
    )


def suggest_companies(db: Session, q: str | None, limit: Any = None) -> List[Company]:
    """
    Ranked company suggestions for a free-text query.

    Prefix matches (on name or any alias) come first; remaining slots are
    filled with substring matches not already returned.
    """
    safe_limit = clamp_limit(limit)
    normalized = normalize_name(q)
    if not normalized:
        return []

    escaped = escape_like(normalized)
    prefix_items = _match_companies(db, f"{escaped}%", safe_limit)

    remaining = safe_limit - len(prefix_items)
    if remaining <= 0:
        return prefix_items

    contains_items = _match_companies(
        db,
        f"%{escaped}%",
        remaining,
        exclude_ids=[c.id for c in prefix_items],
    )
    return prefix_items + contains_items


def increment_member_count(db: Session, company_id: Optional[UUID], delta: int) -> None:
    """Atomic counter bump; no-op without a company id. Caller commits."""
    if not company_id:
        return
    atomic_increment(db, Company.member_count, Company.id == company_id, delta)
    logger.info(
        "Company member count adjusted by %s",
        delta,
        extra={"company_id": str(company_id), "step": "member_count"},
    )
