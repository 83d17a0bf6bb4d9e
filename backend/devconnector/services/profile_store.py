"""
Profile Store - lifecycle of the per-user Profile document

Operations:
    create_or_update   create-if-absent, merge supplied scalar fields if present
    get_by_user        profile joined with the owner's name and avatar
    list_all           every profile (order unspecified)
    add_experience     prepend an experience record (profile must exist)
    add_education      prepend an education record (profile must exist)
    remove_experience  drop one experience record by id
    remove_education   drop one education record by id
    delete_account     posts -> profile -> user, one transaction

Concurrency:
    Each request gets its own AsyncSession. Lookups are read-then-write with
    no application lock; the unique index on profiles.user_id rejects the
    second of two concurrent first-time upserts, which surfaces here as
    ProfileConflictError.

Usage:
    store = ProfileStore(db)
    profile = await store.create_or_update(user_id, CreateOrUpdateFields(bio="Hi"))
    profile = await store.add_experience(user_id, ExperienceInput(...))
"""

import functools
import logging
import uuid
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from devconnector.middleware.metrics import record_store_operation
from devconnector.models import Post, Profile, User
from devconnector.schemas.profile import CreateOrUpdateFields, EducationInput, ExperienceInput
from devconnector.services.errors import (
    ConflictError,
    NotFoundError,
    ProfileConflictError,
    ProfileNotFoundError,
    StorageError,
    SubRecordNotFoundError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)

EXPERIENCE = "experience"
EDUCATION = "education"


def tracked(operation: str):
    """Record the outcome of a store operation in Prometheus."""

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                result = await func(*args, **kwargs)
            except NotFoundError:
                record_store_operation(operation, "not_found")
                raise
            except ConflictError:
                record_store_operation(operation, "conflict")
                raise
            except StorageError:
                record_store_operation(operation, "storage_error")
                raise
            record_store_operation(operation)
            return result

        return wrapper

    return decorator


class ProfileStore:
    """
    Profile persistence over an injected AsyncSession.

    Sub-records are stored as JSON lists on the profile row, newest first.
    Lists are always replaced, never mutated in place, so the ORM sees the
    change.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    # ==================== Queries ====================

    async def _find(self, user_id: str, reload: bool = False) -> Optional[Profile]:
        query = (
            select(Profile)
            .where(Profile.user_id == user_id)
            .options(selectinload(Profile.user))
        )
        if reload:
            query = query.execution_options(populate_existing=True)

        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            logger.error(f"Profile lookup failed for user {user_id}: {e}")
            raise StorageError() from e
        return result.scalar_one_or_none()

    async def _require(self, user_id: str) -> Profile:
        profile = await self._find(user_id)
        if profile is None:
            raise ProfileNotFoundError()
        return profile

    async def _require_user(self, user_id: str) -> User:
        try:
            user = await self.db.get(User, user_id)
        except SQLAlchemyError as e:
            logger.error(f"User lookup failed for {user_id}: {e}")
            raise StorageError() from e
        if user is None:
            raise UserNotFoundError()
        return user

    async def _commit(self, operation: str, conflict_error: Optional[type] = None) -> None:
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if conflict_error is None:
                logger.error(f"Profile store {operation} violated a constraint: {e}")
                raise StorageError() from e
            logger.warning(f"Profile store {operation} conflict: {e}")
            raise conflict_error() from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Profile store {operation} failed: {e}")
            raise StorageError() from e

    # ==================== Profile ====================

    @tracked("create_or_update")
    async def create_or_update(self, user_id: str, fields: CreateOrUpdateFields) -> Profile:
        """
        Upsert the profile for user_id.

        Creates the profile with empty experience/education when none
        exists, otherwise merges only the supplied fields.

        Raises:
            UserNotFoundError: no user with user_id exists
            ProfileConflictError: a concurrent request created it first
            StorageError: the database call failed
        """
        updates = fields.supplied()
        await self._require_user(user_id)
        profile = await self._find(user_id)

        if profile is None:
            profile = Profile(user_id=user_id, experience=[], education=[], **updates)
            self.db.add(profile)
            logger.info(f"Creating profile for user {user_id}")
        else:
            for field, value in updates.items():
                setattr(profile, field, value)

        await self._commit("create_or_update", conflict_error=ProfileConflictError)
        return await self._find(user_id, reload=True)

    @tracked("get_by_user")
    async def get_by_user(self, user_id: str) -> Profile:
        return await self._require(user_id)

    @tracked("list_all")
    async def list_all(self) -> List[Profile]:
        """All profiles with the owner joined. No ordering is guaranteed."""
        try:
            result = await self.db.execute(select(Profile).options(selectinload(Profile.user)))
        except SQLAlchemyError as e:
            logger.error(f"Profile listing failed: {e}")
            raise StorageError() from e
        return list(result.scalars().all())

    # ==================== Sub-records ====================

    async def _prepend(self, user_id: str, kind: str, record: dict) -> Profile:
        profile = await self._require(user_id)
        record = {"id": uuid.uuid4().hex, **record}
        setattr(profile, kind, [record, *getattr(profile, kind)])

        await self._commit(f"add_{kind}")
        return await self._find(user_id, reload=True)

    async def _remove(self, user_id: str, kind: str, record_id: str) -> Profile:
        profile = await self._require(user_id)
        records = getattr(profile, kind)

        index = next(
            (i for i, record in enumerate(records) if str(record.get("id")) == str(record_id)),
            None,
        )
        if index is None:
            raise SubRecordNotFoundError(kind, record_id)

        setattr(profile, kind, records[:index] + records[index + 1:])
        await self._commit(f"remove_{kind}")
        return await self._find(user_id, reload=True)

    @tracked("add_experience")
    async def add_experience(self, user_id: str, experience: ExperienceInput) -> Profile:
        return await self._prepend(user_id, EXPERIENCE, experience.model_dump(by_alias=True))

    @tracked("add_education")
    async def add_education(self, user_id: str, education: EducationInput) -> Profile:
        return await self._prepend(user_id, EDUCATION, education.model_dump(by_alias=True))

    @tracked("remove_experience")
    async def remove_experience(self, user_id: str, experience_id: str) -> Profile:
        return await self._remove(user_id, EXPERIENCE, experience_id)

    @tracked("remove_education")
    async def remove_education(self, user_id: str, education_id: str) -> Profile:
        return await self._remove(user_id, EDUCATION, education_id)

    # ==================== Account ====================

    @tracked("delete_account")
    async def delete_account(self, user_id: str) -> None:
        """
        Delete the user's posts, profile and user record, in that order.

        All three deletes run in the session's single transaction; a failure
        at any step rolls back the earlier ones.
        """
        try:
            posts = await self.db.execute(delete(Post).where(Post.user_id == user_id))
            await self.db.execute(delete(Profile).where(Profile.user_id == user_id))
            await self.db.execute(delete(User).where(User.id == user_id))
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Account deletion failed for user {user_id}: {e}")
            raise StorageError() from e

        await self._commit("delete_account")
        logger.info(f"Deleted account {user_id} and {posts.rowcount} posts")
