"""GitHub repository listing client.

A pass-through to the GitHub REST API. Failures never leak upstream
details: a non-200 answer, a body that is not JSON or a transport error
is reported as ``GitHubReposNotFoundError`` and the cause is logged.
"""

from typing import Any

import httpx
import structlog

from core.config import settings
from core.exceptions import GitHubReposNotFoundError

logger = structlog.get_logger()


class GitHubClient:
    """Lists a user's most recent public repositories."""

    def __init__(
        self,
        base_url: str = settings.github_api_url,
        client_id: str = settings.github_client_id,
        client_secret: str = settings.github_client_secret,
        timeout: float = settings.github_timeout_seconds,
        repo_limit: int = settings.github_repo_limit,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client_id = client_id
        self._client_secret = client_secret
        self._timeout = timeout
        self._repo_limit = repo_limit
        self._transport = transport

    async def list_repositories(self, username: str) -> list[dict[str, Any]]:
        """Return the upstream JSON list of a user's repositories."""
        params: dict[str, Any] = {
            "per_page": self._repo_limit,
            "sort": "created",
            "direction": "asc",
        }
        if self._client_id and self._client_secret:
            params["client_id"] = self._client_id
            params["client_secret"] = self._client_secret

        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
                headers={"User-Agent": settings.app_name},
            ) as client:
                response = await client.get(f"/users/{username}/repos", params=params)
        except httpx.HTTPError as e:
            logger.warning("github_request_failed", username=username, error=str(e))
            raise GitHubReposNotFoundError(username) from e

        if response.status_code != 200:
            logger.warning(
                "github_repos_unavailable",
                username=username,
                status_code=response.status_code,
            )
            raise GitHubReposNotFoundError(username)

        try:
            return response.json()  # type: ignore[no-any-return]
        except ValueError as e:
            logger.warning("github_response_not_json", username=username, error=str(e))
            raise GitHubReposNotFoundError(username) from e
