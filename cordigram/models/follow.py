from sqlalchemy import Column, Integer, DateTime, Uuid, UniqueConstraint
from datetime import datetime

from ..core.db import Base

class Follow(Base):
    __tablename__ = "follows"

    id = Column(Integer, primary_key=True, autoincrement=True)
    follower_id = Column(Uuid, index=True, nullable=False)  # user ids, not profile ids
    followee_id = Column(Uuid, index=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("follower_id", "followee_id", name="uq_follows_edge"),
    )
