from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import case, func, or_
from sqlalchemy.orm import Session

from ..core.config import get_settings
from ..models.follow import Follow
from ..models.profile import Profile
from ..schemas.profiles import ProfileUpdateRequest
from .errors import NotFoundError, ValidationError
from .query_utils import LIKE_ESCAPE, as_uuid, clamp_limit, escape_like
from .workplace import apply_workplace_change, workplace_change_from

logger = logging.getLogger(__name__)
settings = get_settings()


def _normalize_bio(bio: str) -> str:
    # Keep user formatting, only unify line endings
    return bio.replace("\r\n", "\n").replace("\r", "\n")


def find_profile_by_user_id(db: Session, user_id: Any) -> Optional[Profile]:
    user_uuid = as_uuid(user_id)
    if user_uuid is None:
        return None
    return db.query(Profile).filter(Profile.user_id == user_uuid).first()


def is_username_available(db: Session, username: str, exclude_user_id: Any = None) -> bool:
    query = db.query(Profile.id).filter(Profile.username == username.strip().lower())
    exclude = as_uuid(exclude_user_id)
    if exclude is not None:
        query = query.filter(Profile.user_id != exclude)
    return query.first() is None


def create_or_update_profile(
    db: Session,
    user_id: UUID,
    *,
    display_name: str,
    username: str,
    bio: str | None = None,
    location: str | None = None,
    gender: str | None = None,
    birthdate: date | None = None,
) -> Profile:
    """
    Create the caller's profile, or overwrite its basic fields if it exists.

    Optional fields left as None keep their stored value.
    """
    username = username.strip().lower()
    if not is_username_available(db, username, exclude_user_id=user_id):
        raise ValidationError("Username already taken")

    profile = find_profile_by_user_id(db, user_id)
    if profile is None:
        profile = Profile(
            user_id=user_id,
            avatar_url=settings.DEFAULT_AVATAR_URL,
            avatar_original_url=settings.DEFAULT_AVATAR_URL,
        )
        db.add(profile)
        logger.info("Creating profile", extra={"user_id": str(user_id), "step": "profile_create"})

    profile.display_name = display_name.strip()
    profile.username = username
    if bio is not None:
        profile.bio = _normalize_bio(bio)
    if location is not None:
        profile.location = location.strip()
    if gender is not None:
        profile.gender = gender
    if birthdate is not None:
        profile.birthdate = birthdate

    db.commit()
    db.refresh(profile)
    return profile


def update_profile(db: Session, user_id: Any, payload: ProfileUpdateRequest) -> Profile:
    """
    Apply a partial profile update, including workplace linkage.

    The profile write and the company member-count updates are committed
    in one transaction.
    """
    user_uuid = as_uuid(user_id)
    if user_uuid is None:
        raise ValidationError("Invalid user id")

    profile = find_profile_by_user_id(db, user_uuid)
    if profile is None:
        raise NotFoundError("Profile not found")

    fields = payload.model_fields_set
    try:
        if "username" in fields and payload.username is not None:
            if not is_username_available(db, payload.username, exclude_user_id=user_uuid):
                raise ValidationError("Username already taken")
            profile.username = payload.username

        if "display_name" in fields and payload.display_name is not None:
            profile.display_name = payload.display_name.strip()

        if "bio" in fields and payload.bio is not None:
            profile.bio = _normalize_bio(payload.bio)

        if "location" in fields and payload.location is not None:
            profile.location = payload.location.strip()

        if payload.touches_workplace:
            change = workplace_change_from(payload.workplace_name, payload.workplace_company_id)
            apply_workplace_change(db, profile, change)

        if "gender" in fields:
            profile.gender = payload.gender or ""

        if "birthdate" in fields:
            profile.birthdate = payload.birthdate

        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(profile)
    return profile


def search_profiles(
    db: Session,
    query: str | None,
    limit: Any = None,
    exclude_user_id: Any = None,
) -> List[Profile]:
    """
    Case-insensitive substring search over username and display name.

    Ranking: username prefix, display-name prefix, shorter username,
    more followers, newer profile.
    """
    term = (query or "").strip().lower()
    if not term:
        return []

    safe_limit = clamp_limit(limit)
    escaped = escape_like(term)
    prefix = f"{escaped}%"
    anywhere = f"%{escaped}%"

    username_prefix = case(
        (Profile.username.ilike(prefix, escape=LIKE_ESCAPE), 1), else_=0
    )
    display_prefix = case(
        (Profile.display_name.ilike(prefix, escape=LIKE_ESCAPE), 1), else_=0
    )

    q = db.query(Profile).filter(
        or_(
            Profile.username.ilike(anywhere, escape=LIKE_ESCAPE),
            Profile.display_name.ilike(anywhere, escape=LIKE_ESCAPE),
        )
    )
    exclude = as_uuid(exclude_user_id)
    if exclude is not None:
        q = q.filter(Profile.user_id != exclude)

    return (
        q.order_by(
            username_prefix.desc(),
            display_prefix.desc(),
            func.length(Profile.username).asc(),
            Profile.followers_count.desc(),
            Profile.created_at.desc(),
        )
        .limit(safe_limit)
        .all()
    )


def get_profile_details(
    db: Session,
    username_or_id: str | None,
    viewer_id: Any = None,
) -> Dict[str, Any]:
    """
    Public profile view, looked up by username ("@name" accepted),
    profile id or owning user id.
    """
    raw = (username_or_id or "").strip()
    if not raw:
        raise ValidationError("username_or_id is required")

    clauses = [Profile.username == raw.lower().removeprefix("@")]
    maybe_uuid = as_uuid(raw)
    if maybe_uuid is not None:
        clauses += [Profile.id == maybe_uuid, Profile.user_id == maybe_uuid]

    profile = db.query(Profile).filter(or_(*clauses)).first()
    if profile is None:
        raise NotFoundError("Profile not found")

    owner_id = profile.user_id
    followers = db.query(func.count(Follow.id)).filter(Follow.followee_id == owner_id).scalar()
    following = db.query(func.count(Follow.id)).filter(Follow.follower_id == owner_id).scalar()

    viewer = as_uuid(viewer_id)
    is_following = False
    if viewer is not None:
        is_following = (
            db.query(Follow.id)
            .filter(Follow.follower_id == viewer, Follow.followee_id == owner_id)
            .first()
            is not None
        )

    return {
        "id": profile.id,
        "user_id": owner_id,
        "display_name": profile.display_name,
        "username": profile.username,
        "avatar_url": profile.avatar_url or settings.DEFAULT_AVATAR_URL,
        "avatar_original_url": profile.avatar_original_url or settings.DEFAULT_AVATAR_URL,
        "cover_url": profile.cover_url or "",
        "bio": profile.bio or "",
        "gender": profile.gender or "",
        "location": profile.location or "",
        "workplace": {
            "company_id": str(profile.workplace_company_id) if profile.workplace_company_id else "",
            "company_name": profile.workplace_company_name or "",
        },
        "birthdate": profile.birthdate.isoformat() if profile.birthdate else "",
        "stats": {"followers": followers or 0, "following": following or 0},
        "is_following": is_following,
    }
