from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from ..models.follow import Follow
from ..models.profile import Profile
from .errors import NotFoundError, ValidationError
from .profiles import find_profile_by_user_id
from .query_utils import as_uuid, atomic_increment, insert_ignoring_conflicts

logger = logging.getLogger(__name__)


def _require_ids(follower_id: Any, followee_id: Any) -> tuple[UUID, UUID]:
    follower = as_uuid(follower_id)
    followee = as_uuid(followee_id)
    if follower is None or followee is None:
        raise ValidationError("Invalid user id")
    if follower == followee:
        raise ValidationError("You cannot follow yourself")
    return follower, followee


def _bump_counters(db: Session, follower: UUID, followee: UUID, delta: int) -> None:
    atomic_increment(db, Profile.followers_count, Profile.user_id == followee, delta)
    atomic_increment(db, Profile.following_count, Profile.user_id == follower, delta)


def is_following(db: Session, follower_id: Any, followee_id: Any) -> bool:
    follower = as_uuid(follower_id)
    followee = as_uuid(followee_id)
    if follower is None or followee is None:
        return False
    return (
        db.query(Follow.id)
        .filter(Follow.follower_id == follower, Follow.followee_id == followee)
        .first()
        is not None
    )


def follow_user(db: Session, follower_id: Any, followee_id: Any) -> bool:
    """
    Create the follow edge if missing. Idempotent.

    Returns True when this call created the edge; counters move only then.
    """
    follower, followee = _require_ids(follower_id, followee_id)
    if find_profile_by_user_id(db, followee) is None:
        raise NotFoundError("Profile not found")

    try:
        created = insert_ignoring_conflicts(
            db,
            Follow,
            {"follower_id": follower, "followee_id": followee},
            conflict_columns=["follower_id", "followee_id"],
        )
        if created:
            _bump_counters(db, follower, followee, 1)
        db.commit()
    except Exception:
        db.rollback()
        raise

    if created:
        logger.info("Follow created", extra={"user_id": str(follower), "step": "follow"})
    return bool(created)


def unfollow_user(db: Session, follower_id: Any, followee_id: Any) -> bool:
    """Remove the follow edge if present. Returns True when an edge was removed."""
    follower, followee = _require_ids(follower_id, followee_id)

    try:
        removed = (
            db.query(Follow)
            .filter(Follow.follower_id == follower, Follow.followee_id == followee)
            .delete(synchronize_session=False)
        )
        if removed:
            _bump_counters(db, follower, followee, -1)
        db.commit()
    except Exception:
        db.rollback()
        raise

    if removed:
        logger.info("Follow removed", extra={"user_id": str(follower), "step": "unfollow"})
    return bool(removed)
