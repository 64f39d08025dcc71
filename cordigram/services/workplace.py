"""
Workplace linkage between a profile and the company directory.

A workplace update arrives as an optional free-text name and/or an optional
company id. It is turned into one of three explicit changes before touching
any state, then applied together with the company member counters.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from sqlalchemy.orm import Session

from ..models.profile import Profile
from .companies import ensure_company_by_name, find_company_by_id, increment_member_count
from .errors import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ById:
    company_id: str


@dataclass(frozen=True)
class ByName:
    name: str


@dataclass(frozen=True)
class Clear:
    pass


WorkplaceChange = Union[ById, ByName, Clear]


def workplace_change_from(
    workplace_name: Optional[str],
    workplace_company_id: Optional[str],
) -> WorkplaceChange:
    """An explicit id wins over a name; both blank means clear."""
    company_id = (workplace_company_id or "").strip()
    name = (workplace_name or "").strip()
    if company_id:
        return ById(company_id)
    if name:
        return ByName(name)
    return Clear()


def apply_workplace_change(db: Session, profile: Profile, change: WorkplaceChange) -> None:
    """
    Point `profile` at the requested workplace and keep member counts in step.

    Re-saving the current workplace leaves every counter unchanged. Does not
    commit; the caller commits the profile write and counter updates together.
    """
    prev_company_id = profile.workplace_company_id

    if isinstance(change, Clear):
        profile.workplace_company_id = None
        profile.workplace_company_name = ""
        if prev_company_id:
            increment_member_count(db, prev_company_id, -1)
        return

    if isinstance(change, ById):
        company = find_company_by_id(db, change.company_id)
    else:
        company = ensure_company_by_name(db, change.name)

    if company is None:
        raise ValidationError("workplace is invalid")

    next_company_id = company.id
    profile.workplace_company_id = next_company_id
    profile.workplace_company_name = company.name

    prev_str = str(prev_company_id) if prev_company_id else ""
    next_str = str(next_company_id)
    if prev_str == next_str:
        return

    if prev_company_id:
        increment_member_count(db, prev_company_id, -1)
    increment_member_count(db, next_company_id, 1)

    logger.info(
        "Workplace moved",
        extra={
            "user_id": str(profile.user_id),
            "company_id": next_str,
            "step": "workplace_link",
        },
    )
