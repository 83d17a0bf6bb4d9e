from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from devconnector.database import Base
import uuid


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Post(Base):
    """
    Post authored by a user.

    name and avatar are copied from the author when the post is created so
    the feed renders without a join. date is set client-side so posts made
    within the same second still sort newest first.
    """

    __tablename__ = "posts"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    text = Column(Text, nullable=False)
    name = Column(String(200), nullable=True)
    avatar = Column(String(500), nullable=True)
    date = Column(DateTime, nullable=False, default=_utcnow, index=True)
