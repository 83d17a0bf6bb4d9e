"""
Profile Model - one per user

Scalar fields (university, location, bio) are merged on update. Experience
and education entries are embedded JSON documents kept newest-first:

    experience: [{"id", "title", "university", "location", "from", "to",
                  "current", "description"}, ...]
    education:  [{"id", "school", "degree", "fieldofstudy", "from", "to",
                  "current", "description"}, ...]

The unique constraint on user_id is what guarantees at most one profile
per user; the store relies on it when two first-time upserts race.
"""

from sqlalchemy import Column, String, Text, JSON, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from devconnector.database import Base
import uuid


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id"), nullable=False, unique=True, index=True)
    university = Column(String(500), nullable=True)
    location = Column(String(500), nullable=True)
    bio = Column(Text, nullable=True)
    experience = Column(JSON, nullable=False, default=list)
    education = Column(JSON, nullable=False, default=list)
    date = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("User", lazy="selectin")
