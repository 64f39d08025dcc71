from sqlalchemy import Column, String, Text, Integer, Date, DateTime, ForeignKey, Uuid
from datetime import datetime
import uuid
from ..core.db import Base


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, unique=True, index=True, nullable=False)
    username = Column(String(30), unique=True, index=True, nullable=False)  # lowercase
    display_name = Column(String, nullable=False)

    avatar_url = Column(String, nullable=False, default="")
    avatar_original_url = Column(String, nullable=False, default="")
    avatar_public_id = Column(String, nullable=False, default="")
    avatar_original_public_id = Column(String, nullable=False, default="")
    cover_url = Column(String, nullable=False, default="")

    bio = Column(Text, nullable=False, default="")
    location = Column(String, nullable=False, default="")
    gender = Column(String(32), nullable=False, default="")  # schemas.profiles.Gender or ""
    birthdate = Column(Date, nullable=True)

    # Workplace: company reference plus a snapshot of its name at link time
    workplace_company_id = Column(Uuid, ForeignKey("companies.id"), index=True, nullable=True)
    workplace_company_name = Column(String(120), nullable=False, default="")

    # Denormalized counters maintained by services.follows
    followers_count = Column(Integer, nullable=False, default=0)
    following_count = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
