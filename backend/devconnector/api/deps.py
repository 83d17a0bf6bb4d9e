from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from devconnector.database import get_db
from devconnector.services import AccountService, GitHubClient, PostService, ProfileStore


def get_profile_store(db: AsyncSession = Depends(get_db)) -> ProfileStore:
    return ProfileStore(db)


def get_account_service(db: AsyncSession = Depends(get_db)) -> AccountService:
    return AccountService(db)


def get_post_service(db: AsyncSession = Depends(get_db)) -> PostService:
    return PostService(db)


def get_github_client() -> GitHubClient:
    return GitHubClient()
