from devconnector.services.profile_store import ProfileStore
from devconnector.services.accounts import AccountService
from devconnector.services.posts import PostService
from devconnector.services.github import GitHubClient

__all__ = ["ProfileStore", "AccountService", "PostService", "GitHubClient"]
