# cordigram/schemas/profiles.py
import re
from datetime import date
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

USERNAME_RE = re.compile(r"^[a-z0-9_.]{3,30}$")
BIO_CHAR_LIMIT = 300
MAX_DISPLAY_NAME_LEN = 60
MAX_LOCATION_LEN = 120
MAX_WORKPLACE_NAME_LEN = 120

Gender = Literal["male", "female", "other", "prefer_not_to_say"]


def validate_username(v: str) -> str:
    normalized = v.strip().lower()
    if not normalized:
        raise ValueError("username is required")
    if not USERNAME_RE.match(normalized):
        raise ValueError("username is invalid")
    return normalized


def _check_birthdate(v: date | None) -> date | None:
    if v is not None and v > date.today():
        raise ValueError("birthdate cannot be in the future")
    return v


class ProfileFieldsMixin(BaseModel):
    """Optional profile fields shared by create and update payloads."""
    bio: str | None = None
    location: str | None = None
    gender: Gender | None = None
    birthdate: date | None = None

    @field_validator("gender", "birthdate", mode="before")
    @classmethod
    def _blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("bio")
    @classmethod
    def validate_bio(cls, v: str | None) -> str | None:
        if v is not None and len(v) > BIO_CHAR_LIMIT:
            raise ValueError(f"bio must be at most {BIO_CHAR_LIMIT} characters")
        return v

    @field_validator("location")
    @classmethod
    def validate_location(cls, v: str | None) -> str | None:
        if v is not None and len(v.strip()) > MAX_LOCATION_LEN:
            raise ValueError(f"location must be at most {MAX_LOCATION_LEN} characters")
        return v

    @field_validator("birthdate")
    @classmethod
    def validate_birthdate(cls, v: date | None) -> date | None:
        return _check_birthdate(v)


class ProfileUpsertRequest(ProfileFieldsMixin):
    display_name: str
    username: str

    @field_validator("display_name")
    @classmethod
    def validate_display_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("display_name must not be empty")
        if len(v) > MAX_DISPLAY_NAME_LEN:
            raise ValueError(f"display_name must be at most {MAX_DISPLAY_NAME_LEN} characters")
        return v

    @field_validator("username")
    @classmethod
    def _username(cls, v: str) -> str:
        return validate_username(v)


class ProfileUpdateRequest(ProfileFieldsMixin):
    """
    Partial update. Only fields present in the payload are applied
    (see `model_fields_set`); an explicitly blank workplace clears it.
    """
    display_name: str | None = None
    username: str | None = None
    workplace_name: str | None = None
    workplace_company_id: str | None = None

    @field_validator("display_name")
    @classmethod
    def validate_display_name(cls, v: str | None) -> str | None:
        if v is not None and len(v.strip()) > MAX_DISPLAY_NAME_LEN:
            raise ValueError(f"display_name must be at most {MAX_DISPLAY_NAME_LEN} characters")
        return v

    @field_validator("username")
    @classmethod
    def _username(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return validate_username(v)

    @field_validator("workplace_name")
    @classmethod
    def validate_workplace_name(cls, v: str | None) -> str | None:
        if v is not None and len(v) > MAX_WORKPLACE_NAME_LEN:
            raise ValueError(
                f"workplace_name must be at most {MAX_WORKPLACE_NAME_LEN} characters"
            )
        return v

    @property
    def touches_workplace(self) -> bool:
        return bool({"workplace_name", "workplace_company_id"} & self.model_fields_set)


class ProfileSearchItemOut(BaseModel):
    id: UUID
    user_id: UUID
    username: str
    display_name: str
    avatar_url: str
    followers_count: int

    model_config = ConfigDict(from_attributes=True)


class ProfileSearchResponse(BaseModel):
    items: list[ProfileSearchItemOut]
    count: int


class ProfileMeOut(BaseModel):
    id: UUID
    user_id: UUID
    display_name: str
    username: str
    avatar_url: str

    model_config = ConfigDict(from_attributes=True)


class UsernameAvailabilityOut(BaseModel):
    available: bool


class WorkplaceOut(BaseModel):
    company_id: str = ""
    company_name: str = ""


class ProfileStatsOut(BaseModel):
    followers: int = 0
    following: int = 0


class ProfileDetailsOut(BaseModel):
    id: UUID
    user_id: UUID
    display_name: str
    username: str
    avatar_url: str
    avatar_original_url: str
    cover_url: str = ""
    bio: str = ""
    gender: str = ""
    location: str = ""
    workplace: WorkplaceOut
    birthdate: str = ""
    stats: ProfileStatsOut
    is_following: bool = False
