"""
User Model - registered account

Owns exactly one optional Profile and any number of Posts. The public
fields (name, avatar) are joined onto profiles and copied onto posts.
"""

from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from devconnector.database import Base
import uuid


class User(Base):
    """
    Account entity.

    Attributes:
        id: UUID primary key
        name: Display name
        email: Login identifier (unique)
        avatar: Gravatar URL derived from the email at registration
        password: Salted PBKDF2 hash, never returned by the API
    """

    __tablename__ = "users"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(200), nullable=False)
    email = Column(String(320), nullable=False, unique=True, index=True)
    avatar = Column(String(500), nullable=True)
    password = Column(String(256), nullable=False)
    date = Column(DateTime, server_default=func.now())
