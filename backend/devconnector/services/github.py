"""
GitHub repository lookup

Proxies the public repository listing for a username. The profile store
never depends on it; the profile page calls it separately.
"""

import logging
from typing import Any, List, Optional

import httpx

from devconnector.config import Settings, get_settings
from devconnector.middleware.metrics import record_github_lookup
from devconnector.services.errors import NotFoundError

logger = logging.getLogger(__name__)


class GitHubProfileNotFoundError(NotFoundError):
    message = "No Github profile found"


class GitHubLookupError(Exception):
    """GitHub could not be reached."""


class GitHubClient:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = settings or get_settings()
        self.base_url = settings.github_api_url.rstrip("/")
        self.per_page = settings.github_repos_per_page
        self.timeout = settings.github_timeout_seconds
        self.auth = None
        if settings.github_client_id and settings.github_secret:
            self.auth = (settings.github_client_id, settings.github_secret)
        self._transport = transport

    async def list_repos(self, username: str) -> List[Any]:
        """
        Most recently created public repos for username, oldest first.

        Raises:
            GitHubProfileNotFoundError: GitHub answered with anything but 200
            GitHubLookupError: the request itself failed
        """
        params = {
            "per_page": self.per_page,
            "sort": "created",
            "direction": "asc",
        }
        headers = {"User-Agent": "devconnector", "Accept": "application/vnd.github+json"}

        async with httpx.AsyncClient(transport=self._transport, auth=self.auth) as client:
            try:
                response = await client.get(
                    f"{self.base_url}/users/{username}/repos",
                    params=params,
                    headers=headers,
                    timeout=self.timeout,
                )
            except httpx.HTTPError as e:
                logger.error(f"GitHub API error for {username}: {e}")
                record_github_lookup("error")
                raise GitHubLookupError(str(e)) from e

        if response.status_code != 200:
            logger.warning(f"GitHub returned {response.status_code} for {username}")
            record_github_lookup("not_found")
            raise GitHubProfileNotFoundError()

        record_github_lookup("ok")
        return response.json()
