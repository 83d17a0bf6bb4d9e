"""
Account Service - registration, login and user lookup

Avatars are Gravatar URLs derived from the email (200px, PG rating,
mystery-man fallback), computed once at registration.
"""

import hashlib
import logging
from urllib.parse import urlencode

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from devconnector.auth import hash_password, verify_password
from devconnector.models import User
from devconnector.schemas.user import UserRegister
from devconnector.services.errors import StorageError, UserExistsError, UserNotFoundError

logger = logging.getLogger(__name__)

GRAVATAR_URL = "https://www.gravatar.com/avatar"


class InvalidCredentialsError(Exception):
    """Email unknown or password mismatch. Deliberately not distinguished."""


def gravatar_url(email: str, size: int = 200, rating: str = "pg", default: str = "mm") -> str:
    digest = hashlib.md5(email.strip().lower().encode()).hexdigest()
    return f"{GRAVATAR_URL}/{digest}?{urlencode({'s': size, 'r': rating, 'd': default})}"


class AccountService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _by_email(self, email: str):
        try:
            result = await self.db.execute(select(User).where(User.email == email.lower()))
        except SQLAlchemyError as e:
            logger.error(f"User lookup failed: {e}")
            raise StorageError() from e
        return result.scalar_one_or_none()

    async def register(self, data: UserRegister) -> User:
        """
        Create a user with a hashed password and Gravatar avatar.

        Raises:
            UserExistsError: the email is already registered
        """
        email = str(data.email).lower()
        if await self._by_email(email):
            raise UserExistsError()

        user = User(
            name=data.name,
            email=email,
            avatar=gravatar_url(email),
            password=hash_password(data.password),
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise UserExistsError() from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"User registration failed: {e}")
            raise StorageError() from e

        await self.db.refresh(user)
        logger.info(f"Registered user {user.id}")
        return user

    async def authenticate(self, email: str, password: str) -> User:
        user = await self._by_email(email)
        if user is None or not verify_password(password, user.password):
            raise InvalidCredentialsError()
        return user

    async def get_user(self, user_id: str) -> User:
        try:
            user = await self.db.get(User, user_id)
        except SQLAlchemyError as e:
            logger.error(f"User lookup failed: {e}")
            raise StorageError() from e
        if user is None:
            raise UserNotFoundError()
        return user
