import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from devconnector.models import Post, User
from devconnector.services.errors import (
    PermissionDeniedError,
    PostNotFoundError,
    StorageError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)


class PostService:
    """Posts feed. Authors' name and avatar are copied onto each post."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _commit(self, operation: str) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Post {operation} failed: {e}")
            raise StorageError() from e

    async def _get(self, model, key: str):
        try:
            return await self.db.get(model, key)
        except SQLAlchemyError as e:
            logger.error(f"{model.__name__} lookup failed for {key}: {e}")
            raise StorageError() from e

    async def create(self, user_id: str, text: str) -> Post:
        author = await self._get(User, user_id)
        if author is None:
            raise UserNotFoundError()

        post = Post(user_id=user_id, text=text, name=author.name, avatar=author.avatar)
        self.db.add(post)
        await self._commit("create")
        await self.db.refresh(post)
        return post

    async def list_recent(self) -> List[Post]:
        """All posts, newest first."""
        try:
            result = await self.db.execute(select(Post).order_by(Post.date.desc(), Post.id))
        except SQLAlchemyError as e:
            logger.error(f"Post listing failed: {e}")
            raise StorageError() from e
        return list(result.scalars().all())

    async def get(self, post_id: str) -> Post:
        post = await self._get(Post, post_id)
        if post is None:
            raise PostNotFoundError()
        return post

    async def delete(self, user_id: str, post_id: str) -> None:
        post = await self.get(post_id)
        if post.user_id != user_id:
            raise PermissionDeniedError()

        await self.db.delete(post)
        await self._commit("delete")
