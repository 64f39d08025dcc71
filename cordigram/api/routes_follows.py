from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..core.db import get_db
from ..schemas.follows import FollowStateOut
from ..services.errors import NotFoundError, ValidationError
from ..services.follows import follow_user, is_following, unfollow_user
from ..services.profiles import find_profile_by_user_id
from .deps import get_current_user_id, verify_api_key

router = APIRouter(tags=["follows"])


def _follow_state(db: Session, follower_id: UUID, followee_id: UUID) -> FollowStateOut:
    followee = find_profile_by_user_id(db, followee_id)
    return FollowStateOut(
        followee_id=followee_id,
        is_following=is_following(db, follower_id, followee_id),
        followers_count=followee.followers_count if followee else 0,
    )


@router.post("/follows/{followee_id}", response_model=FollowStateOut)
def follow(
    followee_id: UUID,
    db: Session = Depends(get_db),
    _: None = Depends(verify_api_key),
    user_id: UUID = Depends(get_current_user_id),
):
    try:
        follow_user(db, user_id, followee_id)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _follow_state(db, user_id, followee_id)


@router.delete("/follows/{followee_id}", response_model=FollowStateOut)
def unfollow(
    followee_id: UUID,
    db: Session = Depends(get_db),
    _: None = Depends(verify_api_key),
    user_id: UUID = Depends(get_current_user_id),
):
    try:
        unfollow_user(db, user_id, followee_id)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _follow_state(db, user_id, followee_id)
