"""
Factory functions to provide shared clients and services as FastAPI dependencies.

Only the outbound HTTP client is process-wide; everything built on top of it
is cheap and assembled per request so overrides of ``get_http_client`` or
``get_app_settings`` reach every consumer.
"""

from functools import lru_cache
from typing import Annotated, Optional

import httpx
from fastapi import Depends

from devsim_api.clients import GeminiClient, GitHubApiClient, GitHubOAuthClient, OAuthStateEncoder
from devsim_api.core.config import AppSettings, get_settings
from devsim_api.dependencies.config import get_app_settings
from devsim_api.services import GitHubAuthFlow, SessionStore, SessionCipher


_http_client: Optional[httpx.AsyncClient] = None


def _build_http_client(settings: AppSettings) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http.timeout_seconds),
        limits=httpx.Limits(max_connections=settings.http.max_connections),
        headers={"User-Agent": settings.github.user_agent},
    )


async def get_http_client() -> httpx.AsyncClient:
    """Provide the pooled HTTP client used for every outbound call.

    Runs on the event loop with no await between the check and the
    assignment, so concurrent first requests share a single client.
    """
    global _http_client
    if _http_client is None:
        _http_client = _build_http_client(get_settings())
    return _http_client


async def close_http_client() -> None:
    """Release pooled connections; the next request builds a fresh client."""
    global _http_client
    client, _http_client = _http_client, None
    if client is not None:
        await client.aclose()


def get_github_oauth_client(
    settings: Annotated[AppSettings, Depends(get_app_settings)],
    http_client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
) -> GitHubOAuthClient:
    """Build the GitHub OAuth client."""
    return GitHubOAuthClient(settings.github, http_client)


def get_github_api_client(
    settings: Annotated[AppSettings, Depends(get_app_settings)],
    http_client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
) -> GitHubApiClient:
    """Build the GitHub REST client used by the repository proxy."""
    return GitHubApiClient(settings.github, http_client)


def get_oauth_state_encoder(
    settings: Annotated[AppSettings, Depends(get_app_settings)],
) -> OAuthStateEncoder:
    """Provide an OAuth state encoder keyed by the session secret."""
    return OAuthStateEncoder(secret_key=settings.session_secret)


def get_session_cipher(
    settings: Annotated[AppSettings, Depends(get_app_settings)],
) -> SessionCipher:
    """Provide the Fernet cipher that seals session cookies."""
    return SessionCipher(secret=settings.session_secret)


def get_session_store(
    settings: Annotated[AppSettings, Depends(get_app_settings)],
    cipher: Annotated[SessionCipher, Depends(get_session_cipher)],
) -> SessionStore:
    """Provide the cookie-backed session store."""
    return SessionStore(settings=settings.session, cipher=cipher)


def get_auth_flow(
    settings: Annotated[AppSettings, Depends(get_app_settings)],
    oauth_client: Annotated[GitHubOAuthClient, Depends(get_github_oauth_client)],
    state_encoder: Annotated[OAuthStateEncoder, Depends(get_oauth_state_encoder)],
    session_store: Annotated[SessionStore, Depends(get_session_store)],
) -> GitHubAuthFlow:
    """Assemble the GitHub sign-in flow."""
    return GitHubAuthFlow(
        oauth_client=oauth_client,
        state_encoder=state_encoder,
        session_store=session_store,
        settings=settings.session,
    )


@lru_cache()
def get_gemini_client() -> Optional[GeminiClient]:
    """Provide Gemini client instance when an API key is configured."""
    settings = get_settings()
    if not settings.gemini.api_key:
        return None
    return GeminiClient(settings.gemini)


__all__ = [
    "close_http_client",
    "get_auth_flow",
    "get_gemini_client",
    "get_github_api_client",
    "get_github_oauth_client",
    "get_http_client",
    "get_oauth_state_encoder",
    "get_session_store",
    "get_session_cipher",
]
