"""Client for GitHub REST calls made on behalf of a signed-in user."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Dict, Optional

import httpx

from devsim_api.core.config import GitHubSettings
from devsim_api.core.errors import DownstreamCallFailed

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DownstreamResponse:
    """A successful downstream body, passed through untouched."""

    status_code: int
    content: bytes
    link: Optional[str] = None


class GitHubApiClient:
    """Proxy GitHub API requests using the caller's access token."""

    def __init__(self, settings: GitHubSettings, http_client: httpx.AsyncClient) -> None:
        self._github = settings
        self._http = http_client

    async def list_repositories(
        self,
        access_token: str,
        *,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
    ) -> DownstreamResponse:
        """List repositories visible to the token owner."""
        params: Dict[str, int] = {}
        if page is not None:
            params["page"] = page
        if per_page is not None:
            params["per_page"] = per_page

        try:
            response = await self._http.get(
                self._github.repos_url,
                params=params,
                headers={
                    "Authorization": f"Bearer {access_token}",
                    "Accept": "application/json",
                    "User-Agent": self._github.user_agent,
                },
            )
        except httpx.TimeoutException as exc:
            logger.warning("GitHub repository listing timed out")
            raise DownstreamCallFailed("GitHub API timed out.") from exc
        except httpx.HTTPError as exc:
            logger.warning("GitHub repository listing transport error: %s", type(exc).__name__)
            raise DownstreamCallFailed("GitHub API is unreachable.") from exc

        if not response.is_success:
            logger.warning("GitHub repository listing failed (status=%s)", response.status_code)
            raise DownstreamCallFailed(
                f"GitHub API returned status {response.status_code}.",
                downstream_status=response.status_code,
            )

        try:
            json.loads(response.content)
        except ValueError as exc:
            raise DownstreamCallFailed(
                "GitHub API returned invalid JSON.",
                downstream_status=response.status_code,
            ) from exc

        return DownstreamResponse(
            status_code=response.status_code,
            content=response.content,
            link=response.headers.get("link"),
        )


__all__ = ["DownstreamResponse", "GitHubApiClient"]
