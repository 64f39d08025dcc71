# cordigram/schemas/companies.py
from uuid import UUID

from pydantic import BaseModel, ConfigDict

MAX_COMPANY_QUERY_LEN = 120


class CompanySuggestionOut(BaseModel):
    id: UUID
    name: str
    member_count: int = 0

    model_config = ConfigDict(from_attributes=True)


class CompanySuggestResponse(BaseModel):
    items: list[CompanySuggestionOut]
    count: int
