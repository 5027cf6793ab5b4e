from typing import Any

import httpx
import structlog

from src.core.config.github_config import GitHubConfig

logger = structlog.get_logger(__name__)


class GitHubClient:
    """
    Thin wrapper around an ``httpx.AsyncClient`` for the GitHub REST API.

    Every request carries a bearer credential (an app JWT or an installation
    token) and the same fixed client headers. Responses are returned as-is;
    callers decide what counts as a failure.
    """

    def __init__(self, http_client: httpx.AsyncClient, github_config: GitHubConfig):
        self._http = http_client
        self.base_url = github_config.api_base_url.rstrip("/")
        self._api_version = github_config.api_version
        self._user_agent = github_config.user_agent

    def _headers(self, token: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "User-Agent": self._user_agent,
            "X-GitHub-Api-Version": self._api_version,
        }

    async def request(
        self,
        method: str,
        path: str,
        token: str,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """
        Send a single request. Transport errors propagate as ``httpx.HTTPError``.
        """
        url = f"{self.base_url}{path}"
        response = await self._http.request(method, url, headers=self._headers(token), json=json)
        logger.debug("github_request", method=method, path=path, status_code=response.status_code)
        return response
