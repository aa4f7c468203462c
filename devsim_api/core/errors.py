"""
Failure taxonomy for the GitHub login flow and the repository proxy.

Every error names the stage that failed so callers can tell the token
exchange, the user-info fetch and the downstream call apart. Messages never
include tokens, authorization codes or the client secret.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Dict, Optional


class AuthFlowError(Exception):
    """Base class for failures scoped to a single request."""

    stage: str = "auth"
    status_code: int = HTTPStatus.BAD_REQUEST

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.__class__.__doc__ or self.__class__.__name__)

    @property
    def message(self) -> str:
        return str(self.args[0])

    def as_detail(self) -> Dict[str, Any]:
        """Payload suitable for an HTTP error body."""
        return {
            "error": self.__class__.__name__,
            "stage": self.stage,
            "message": self.message,
        }


class CsrfMismatch(AuthFlowError):
    """OAuth state does not match the one issued for this browser."""

    stage = "callback"


class MissingAuthorizationCode(AuthFlowError):
    """Callback request did not carry an authorization code."""

    stage = "callback"


class ProviderDeniedAuthorization(AuthFlowError):
    """Identity provider reported an authorization error."""

    stage = "callback"


class TokenExchangeFailed(AuthFlowError):
    """Authorization code could not be exchanged for an access token."""

    stage = "token_exchange"
    status_code = HTTPStatus.BAD_GATEWAY


class UserInfoFetchFailed(AuthFlowError):
    """User information could not be retrieved from the provider."""

    stage = "user_info"
    status_code = HTTPStatus.BAD_GATEWAY


class MissingRequiredField(AuthFlowError):
    """Provider user information lacks a required field."""

    stage = "claims"
    status_code = HTTPStatus.BAD_GATEWAY

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Provider user information is missing '{field}'.")


class SessionError(AuthFlowError):
    """Base class for session cookie failures."""

    stage = "session"
    status_code = HTTPStatus.UNAUTHORIZED


class NoSession(SessionError):
    """No session cookie was presented."""


class InvalidSession(SessionError):
    """Session cookie failed decryption or validation."""


class ExpiredSession(SessionError):
    """Session cookie is past its lifetime."""


class Unauthenticated(AuthFlowError):
    """Authentication is required."""

    stage = "session"
    status_code = HTTPStatus.UNAUTHORIZED

    def __init__(self, cause: Optional[SessionError] = None) -> None:
        self.cause = cause
        super().__init__("Authentication is required.")

    def as_detail(self) -> Dict[str, Any]:
        detail = super().as_detail()
        if self.cause is not None:
            detail["reason"] = self.cause.__class__.__name__
        return detail


class DownstreamCallFailed(AuthFlowError):
    """Downstream GitHub API call did not succeed."""

    stage = "downstream"
    status_code = HTTPStatus.BAD_GATEWAY

    def __init__(self, message: str, *, downstream_status: Optional[int] = None) -> None:
        self.downstream_status = downstream_status
        super().__init__(message)

    def as_detail(self) -> Dict[str, Any]:
        detail = super().as_detail()
        detail["downstream_status"] = self.downstream_status
        return detail


__all__ = [
    "AuthFlowError",
    "CsrfMismatch",
    "DownstreamCallFailed",
    "ExpiredSession",
    "InvalidSession",
    "MissingAuthorizationCode",
    "MissingRequiredField",
    "NoSession",
    "ProviderDeniedAuthorization",
    "SessionError",
    "TokenExchangeFailed",
    "Unauthenticated",
    "UserInfoFetchFailed",
]
