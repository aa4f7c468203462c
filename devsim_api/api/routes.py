"""
FastAPI routes for GitHub sign-in and the repository proxy.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from fastapi.responses import RedirectResponse

from devsim_api.clients import GitHubApiClient
from devsim_api.core.config import AppSettings
from devsim_api.core.errors import AuthFlowError
from devsim_api.dependencies import (
    get_app_settings,
    get_auth_flow,
    get_github_api_client,
    get_session_store,
    require_authenticated,
)
from devsim_api.models.auth import AuthenticatedPrincipal
from devsim_api.schemas import CurrentUser
from devsim_api.services import GitHubAuthFlow, SessionStore

router = APIRouter()
logger = logging.getLogger(__name__)


def _http_error(exc: AuthFlowError) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=exc.as_detail())


def _callback_url(request: Request, settings: AppSettings) -> str:
    if settings.github.redirect_uri:
        return settings.github.redirect_uri
    return f"{str(request.base_url).rstrip('/')}{settings.github.callback_path}"


@router.get("/health", status_code=HTTPStatus.OK)
async def healthcheck() -> dict:
    """Simple health endpoint for monitoring."""
    return {"status": "ok"}


@router.get("/github/login", status_code=HTTPStatus.FOUND)
async def start_github_login(
    request: Request,
    flow: Annotated[GitHubAuthFlow, Depends(get_auth_flow)],
    settings: Annotated[AppSettings, Depends(get_app_settings)],
    redirect_to: Optional[str] = Query(
        default=None,
        description="Same-site path to return to after signing in.",
    ),
) -> Response:
    """Redirect the browser to GitHub's consent screen."""
    authorization, state_cookie = flow.start_login(
        redirect_uri=_callback_url(request, settings),
        redirect_to=redirect_to,
    )
    response = RedirectResponse(
        url=authorization.provider_authorize_url, status_code=HTTPStatus.FOUND
    )
    state_cookie.apply(response)
    return response


async def handle_github_callback(
    request: Request,
    flow: Annotated[GitHubAuthFlow, Depends(get_auth_flow)],
    settings: Annotated[AppSettings, Depends(get_app_settings)],
    code: Optional[str] = Query(default=None, description="Authorization code."),
    state: Optional[str] = Query(default=None, description="OAuth state token."),
    error: Optional[str] = Query(default=None, description="Provider error code."),
) -> Response:
    """Complete the OAuth exchange, persist the session and redirect onward."""
    try:
        redirect_to, _, session_cookie = await flow.complete_login(
            code=code,
            state=state,
            error=error,
            marker=request.cookies.get(settings.session.state_cookie_name),
            redirect_uri=_callback_url(request, settings),
        )
    except AuthFlowError as exc:
        logger.warning("GitHub callback failed at %s: %s", exc.stage, exc.__class__.__name__)
        raise _http_error(exc) from exc

    response = RedirectResponse(url=redirect_to, status_code=HTTPStatus.FOUND)
    session_cookie.apply(response)
    flow.clear_state_cookie().apply(response)
    return response


@router.get("/github/repos", status_code=HTTPStatus.OK)
async def list_github_repositories(
    principal: Annotated[AuthenticatedPrincipal, Depends(require_authenticated)],
    api_client: Annotated[GitHubApiClient, Depends(get_github_api_client)],
    page: Optional[int] = Query(default=None, ge=1),
    per_page: Optional[int] = Query(default=None, ge=1, le=100),
) -> Response:
    """Return the signed-in user's repositories exactly as GitHub sent them."""
    try:
        result = await api_client.list_repositories(
            principal.access_token, page=page, per_page=per_page
        )
    except AuthFlowError as exc:
        logger.warning("Repository listing failed for login=%s", principal.login)
        raise _http_error(exc) from exc

    headers = {"Link": result.link} if result.link else None
    return Response(
        content=result.content,
        status_code=HTTPStatus.OK,
        media_type="application/json",
        headers=headers,
    )


@router.get("/github/me", status_code=HTTPStatus.OK, response_model=CurrentUser)
async def get_current_user(
    principal: Annotated[AuthenticatedPrincipal, Depends(require_authenticated)],
) -> CurrentUser:
    """Describe the signed-in user from the session claims."""
    return CurrentUser(login=principal.login, id=principal.id, claims=principal.claims)


@router.post("/github/logout", status_code=HTTPStatus.NO_CONTENT)
async def sign_out(
    session_store: Annotated[SessionStore, Depends(get_session_store)],
) -> Response:
    """Drop the session cookie."""
    response = Response(status_code=HTTPStatus.NO_CONTENT)
    session_store.clear().apply(response)
    return response


__all__ = ["handle_github_callback", "router"]
