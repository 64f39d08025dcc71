from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..core.db import get_db
from ..schemas.companies import (
    CompanySuggestionOut,
    CompanySuggestResponse,
    MAX_COMPANY_QUERY_LEN,
)
from ..services.companies import suggest_companies
from .deps import get_current_user_id, verify_api_key

router = APIRouter(tags=["companies"])


@router.get("/companies/suggest", response_model=CompanySuggestResponse)
def suggest(
    q: str | None = None,
    limit: str | None = None,
    db: Session = Depends(get_db),
    _: None = Depends(verify_api_key),
    _user_id: UUID = Depends(get_current_user_id),
):
    """
    Workplace autocomplete.

    - `q` is required and at most 120 characters.
    - `limit` defaults to 8 and is clamped to [1, 25].
    """
    if not q or not q.strip():
        raise HTTPException(status_code=400, detail="q is required")
    if len(q) > MAX_COMPANY_QUERY_LEN:
        raise HTTPException(
            status_code=400,
            detail=f"q must be at most {MAX_COMPANY_QUERY_LEN} characters",
        )

    companies = suggest_companies(db, q, limit)
    items = [CompanySuggestionOut.model_validate(c) for c in companies]
    return CompanySuggestResponse(items=items, count=len(items))
