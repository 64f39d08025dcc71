from uuid import UUID
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..core.db import get_db
from ..schemas.profiles import (
    ProfileDetailsOut,
    ProfileMeOut,
    ProfileSearchItemOut,
    ProfileSearchResponse,
    ProfileUpdateRequest,
    ProfileUpsertRequest,
    UsernameAvailabilityOut,
    validate_username,
)
from ..services.errors import NotFoundError, ValidationError
from ..services.profiles import (
    create_or_update_profile,
    find_profile_by_user_id,
    get_profile_details,
    is_username_available,
    search_profiles,
    update_profile,
)
from .deps import get_current_user_id, verify_api_key

router = APIRouter(tags=["profiles"])
logger = logging.getLogger(__name__)


@router.get("/profiles/check-username", response_model=UsernameAvailabilityOut)
def check_username(
    username: str | None = None,
    exclude_user_id: str | None = None,
    db: Session = Depends(get_db),
    _: None = Depends(verify_api_key),
):
    if not username:
        raise HTTPException(status_code=400, detail="username is required")
    try:
        normalized = validate_username(username)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return UsernameAvailabilityOut(
        available=is_username_available(db, normalized, exclude_user_id)
    )


@router.get("/profiles/search", response_model=ProfileSearchResponse)
def search(
    q: str | None = None,
    limit: str | None = None,
    db: Session = Depends(get_db),
    _: None = Depends(verify_api_key),
    user_id: UUID = Depends(get_current_user_id),
):
    """
    People search for mentions / the search panel. The caller's own
    profile is never returned.
    """
    if not q or not q.strip():
        raise HTTPException(status_code=400, detail="q is required")

    rows = search_profiles(db, q, limit=limit, exclude_user_id=user_id)
    items = [ProfileSearchItemOut.model_validate(row) for row in rows]
    return ProfileSearchResponse(items=items, count=len(items))


@router.get("/profiles/me", response_model=ProfileMeOut)
def get_me(
    db: Session = Depends(get_db),
    _: None = Depends(verify_api_key),
    user_id: UUID = Depends(get_current_user_id),
):
    profile = find_profile_by_user_id(db, user_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


@router.put("/profiles/me", response_model=ProfileMeOut)
def upsert_me(
    payload: ProfileUpsertRequest,
    db: Session = Depends(get_db),
    _: None = Depends(verify_api_key),
    user_id: UUID = Depends(get_current_user_id),
):
    try:
        return create_or_update_profile(
            db,
            user_id,
            display_name=payload.display_name,
            username=payload.username,
            bio=payload.bio,
            location=payload.location,
            gender=payload.gender,
            birthdate=payload.birthdate,
        )
    except ValidationError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/profiles/me", response_model=ProfileDetailsOut)
def update_me(
    payload: ProfileUpdateRequest,
    db: Session = Depends(get_db),
    _: None = Depends(verify_api_key),
    user_id: UUID = Depends(get_current_user_id),
):
    try:
        update_profile(db, user_id, payload)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.exception(
            "Profile update failed: %s", e,
            extra={"user_id": str(user_id), "step": "update_profile"},
        )
        raise HTTPException(status_code=500, detail="Failed to update profile")

    return ProfileDetailsOut(
        **get_profile_details(db, str(user_id), viewer_id=user_id)
    )


@router.get("/profiles/{username_or_id}", response_model=ProfileDetailsOut)
def get_profile(
    username_or_id: str,
    db: Session = Depends(get_db),
    _: None = Depends(verify_api_key),
    user_id: UUID = Depends(get_current_user_id),
):
    try:
        details = get_profile_details(db, username_or_id, viewer_id=user_id)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return ProfileDetailsOut(**details)
