"""
Factories and shared cases for company directory / profile tests.
"""
from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from cordigram.models.company import Company, CompanyStatus
from cordigram.models.profile import Profile


# ---------------------------------------------------------------------------
# Normalization cases: (raw input, expected normalized form)
# ---------------------------------------------------------------------------

NORMALIZATION_CASES = [
    ("VTC-Academy", "vtc academy"),
    ("vtc academy", "vtc academy"),
    ("  VTC   Academy  ", "vtc academy"),
    ("Công ty Ánh Dương", "cong ty anh duong"),
    ("Café ☕ Corp", "cafe corp"),
    ("AT&T", "at t"),
    ("Acme, Inc.", "acme inc"),
    ("Tab\tand\nnewline", "tab and newline"),
    ("Zürich Versicherung", "zurich versicherung"),
    ("---", ""),
    ("", ""),
    ("   ", ""),
]


def make_company(
    db,
    name: str,
    *,
    member_count: int = 0,
    status: str = CompanyStatus.ACTIVE,
) -> Company:
    from cordigram.services.normalization import normalize_name

    company = Company(
        name=name,
        name_normalized=normalize_name(name),
        status=status,
        member_count=member_count,
    )
    db.add(company)
    db.commit()
    db.refresh(company)
    return company


def make_profile(
    db,
    username: str,
    display_name: Optional[str] = None,
    *,
    user_id: Optional[UUID] = None,
    followers_count: int = 0,
    created_at: Optional[datetime] = None,
) -> Profile:
    profile = Profile(
        user_id=user_id or uuid4(),
        username=username,
        display_name=display_name or username,
        followers_count=followers_count,
    )
    if created_at is not None:
        profile.created_at = created_at
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


def member_count(db, company_id) -> int:
    """Read the stored counter straight from the table, bypassing the identity map."""
    return db.query(Company.member_count).filter(Company.id == company_id).scalar()
