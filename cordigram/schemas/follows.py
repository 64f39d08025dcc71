# cordigram/schemas/follows.py
from uuid import UUID

from pydantic import BaseModel


class FollowStateOut(BaseModel):
    followee_id: UUID
    is_following: bool
    followers_count: int
