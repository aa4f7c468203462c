try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover
    import _bootstrap  # type: ignore # noqa: F401

import httpx
import pytest

from devsim_api.clients.github_api import GitHubApiClient
from devsim_api.core.config import GitHubSettings
from devsim_api.core.errors import DownstreamCallFailed


def _client(handler) -> GitHubApiClient:
    settings = GitHubSettings(
        GITHUB_CLIENT_ID="client",
        GITHUB_CLIENT_SECRET="secret",
        GITHUB_REPOS_URL="https://api.github.test/user/repos",
    )
    return GitHubApiClient(
        settings, httpx.AsyncClient(transport=httpx.MockTransport(handler))
    )


@pytest.mark.anyio
async def test_list_repositories_returns_body_untouched() -> None:
    body = b'[{"id": 1, "name": "demo", "private": true}]'
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            content=body,
            headers={
                "content-type": "application/json",
                "link": '<https://api.github.test/user/repos?page=3>; rel="next"',
            },
        )

    result = await _client(handler).list_repositories("tok1", page=2, per_page=50)

    assert result.content == body
    assert result.link == '<https://api.github.test/user/repos?page=3>; rel="next"'
    request = seen[0]
    assert request.headers["authorization"] == "Bearer tok1"
    assert request.headers["user-agent"] == "DevSimApp/1.0"
    assert request.url.params["page"] == "2"
    assert request.url.params["per_page"] == "50"


@pytest.mark.anyio
async def test_list_repositories_rejection_carries_downstream_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"message": "Bad credentials"})

    with pytest.raises(DownstreamCallFailed) as exc_info:
        await _client(handler).list_repositories("revoked")

    assert exc_info.value.downstream_status == 401
    assert exc_info.value.as_detail()["downstream_status"] == 401


@pytest.mark.anyio
async def test_list_repositories_invalid_json_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html></html>")

    with pytest.raises(DownstreamCallFailed):
        await _client(handler).list_repositories("tok1")


@pytest.mark.anyio
async def test_list_repositories_timeout_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("slow", request=request)

    with pytest.raises(DownstreamCallFailed) as exc_info:
        await _client(handler).list_repositories("tok1")

    assert exc_info.value.downstream_status is None
