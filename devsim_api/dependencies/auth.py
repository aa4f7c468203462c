"""
Request-scoped authentication.

``get_request_context`` tries to load the session once per request and
returns the outcome; handlers that need a signed-in user depend on
``require_authenticated`` instead of consulting any global state.
"""

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus
from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Request

from devsim_api.core.errors import SessionError, Unauthenticated
from devsim_api.dependencies.clients import get_session_store
from devsim_api.models.auth import AuthenticatedPrincipal
from devsim_api.services import SessionStore


@dataclass(frozen=True)
class RequestContext:
    """Authentication outcome for the current request."""

    principal: Optional[AuthenticatedPrincipal] = None
    failure: Optional[SessionError] = None


def get_request_context(
    request: Request,
    session_store: Annotated[SessionStore, Depends(get_session_store)],
) -> RequestContext:
    """Load the session cookie, if any, and report the outcome."""
    try:
        session = session_store.load(request.cookies.get(session_store.cookie_name))
    except SessionError as exc:
        return RequestContext(failure=exc)
    return RequestContext(principal=AuthenticatedPrincipal.from_session(session))


def require_authenticated(
    context: Annotated[RequestContext, Depends(get_request_context)],
) -> AuthenticatedPrincipal:
    """Return the signed-in principal or answer 401."""
    if context.principal is None:
        error = Unauthenticated(context.failure)
        raise HTTPException(
            status_code=HTTPStatus.UNAUTHORIZED,
            detail=error.as_detail(),
        )
    return context.principal


__all__ = ["RequestContext", "get_request_context", "require_authenticated"]
