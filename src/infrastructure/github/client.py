"""Client for the public GitHub REST API."""

import logging
from typing import Any

import httpx

from core.config import settings
from core.exceptions import GitHubProfileNotFoundError

logger = logging.getLogger(__name__)


class GitHubClient:
    """Fetches public repositories for a GitHub username.

    A new ``httpx.AsyncClient`` is opened per call; ``transport`` lets tests
    swap in ``httpx.MockTransport``.
    """

    def __init__(
        self,
        base_url: str = settings.github_api_url,
        token: str = settings.github_token,
        timeout: float = settings.github_timeout_seconds,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "devconnector-api",
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def get_repos(self, username: str, limit: int = 5) -> list[dict[str, Any]]:
        """Return the user's oldest-first repositories, at most ``limit``.

        Raises:
            GitHubProfileNotFoundError: GitHub answered with anything but 200
        """
        params: dict[str, str | int] = {
            "per_page": limit,
            "sort": "created",
            "direction": "asc",
        }
        async with httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            response = await client.get(
                f"/users/{username}/repos",
                params=params,
                headers=self._headers(),
            )

        if response.status_code != 200:
            logger.info(
                "GitHub returned %s for user %s", response.status_code, username
            )
            raise GitHubProfileNotFoundError(username)

        repos: list[dict[str, Any]] = response.json()
        return repos
