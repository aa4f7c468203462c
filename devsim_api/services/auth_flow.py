"""
GitHub sign-in orchestration.

``start_login`` issues the consent redirect together with a signed
correlation cookie; ``complete_login`` runs the callback steps in order
(state check, code exchange, user info, claims, session) and aborts before
any session is written if one of them fails.
"""

from __future__ import annotations

import hmac
import logging
import re
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from devsim_api.clients.github_auth import GitHubOAuthClient, OAuthStateEncoder
from devsim_api.core.config import SessionSettings
from devsim_api.core.errors import (
    CsrfMismatch,
    MissingAuthorizationCode,
    ProviderDeniedAuthorization,
)
from devsim_api.models.auth import AuthorizationRequest, CookieDescriptor, Session
from devsim_api.services.claims import map_claims
from devsim_api.services.session_store import SessionStore

logger = logging.getLogger(__name__)

DEFAULT_REDIRECT = "/"

# OAuth error codes are short ASCII tokens such as "access_denied".
_PROVIDER_ERROR_CODE = re.compile(r"[A-Za-z0-9_.-]{1,64}")
UNRECOGNIZED_PROVIDER_ERROR = "unrecognized_error"


def safe_redirect_target(value: Optional[str]) -> str:
    """Accept only same-site absolute paths as post-login destinations."""
    if not value or not value.startswith("/") or value.startswith("//") or "\\" in value:
        return DEFAULT_REDIRECT
    return value


def provider_error_code(value: str) -> str:
    """Return ``value`` if it looks like an OAuth error code, else a fixed placeholder."""
    if _PROVIDER_ERROR_CODE.fullmatch(value):
        return value
    return UNRECOGNIZED_PROVIDER_ERROR


class GitHubAuthFlow:
    """Drive the authorization-code flow against GitHub."""

    def __init__(
        self,
        *,
        oauth_client: GitHubOAuthClient,
        state_encoder: OAuthStateEncoder,
        session_store: SessionStore,
        settings: SessionSettings,
    ) -> None:
        self._oauth = oauth_client
        self._state_encoder = state_encoder
        self._sessions = session_store
        self._settings = settings

    def start_login(
        self, *, redirect_uri: str, redirect_to: Optional[str] = None
    ) -> Tuple[AuthorizationRequest, CookieDescriptor]:
        """Create a login attempt and the cookie that binds it to this browser."""
        state = secrets.token_urlsafe(32)
        authorization = AuthorizationRequest(
            state=state,
            redirect_to=safe_redirect_target(redirect_to),
            provider_authorize_url=self._oauth.build_authorization_url(
                state=state, redirect_uri=redirect_uri
            ),
        )
        marker = self._state_encoder.encode(
            {
                "state": authorization.state,
                "redirect_to": authorization.redirect_to,
                "issued_at": authorization.issued_at.isoformat(),
            }
        )
        cookie = CookieDescriptor(
            key=self._settings.state_cookie_name,
            value=marker,
            max_age=self._settings.state_ttl_seconds,
            secure=self._settings.cookie_secure,
            samesite="lax",
        )
        logger.info("Starting GitHub login (redirect_to=%s)", authorization.redirect_to)
        return authorization, cookie

    def clear_state_cookie(self) -> CookieDescriptor:
        return CookieDescriptor(
            key=self._settings.state_cookie_name,
            value="",
            max_age=0,
            secure=self._settings.cookie_secure,
            samesite="lax",
        )

    def verify_state(
        self, *, state: Optional[str], marker: Optional[str], now: Optional[datetime] = None
    ) -> str:
        """Check the returned ``state`` against the marker; return the post-login target."""
        if not marker:
            raise CsrfMismatch("No OAuth login is in progress for this browser.")
        payload = self._state_encoder.decode(marker)

        expected = payload.get("state")
        if not state or not isinstance(expected, str) or not hmac.compare_digest(
            state.encode("utf-8"), expected.encode("utf-8")
        ):
            raise CsrfMismatch("OAuth state does not match the issued value.")

        try:
            issued_at = datetime.fromisoformat(str(payload.get("issued_at")))
        except ValueError as exc:
            raise CsrfMismatch("OAuth state marker is malformed.") from exc
        if issued_at.tzinfo is None:
            issued_at = issued_at.replace(tzinfo=timezone.utc)

        current = now or datetime.now(timezone.utc)
        if current - issued_at > timedelta(seconds=self._settings.state_ttl_seconds):
            raise CsrfMismatch("OAuth state has expired.")

        return safe_redirect_target(payload.get("redirect_to"))

    async def complete_login(
        self,
        *,
        code: Optional[str],
        state: Optional[str],
        error: Optional[str],
        marker: Optional[str],
        redirect_uri: str,
    ) -> Tuple[str, Session, CookieDescriptor]:
        """Finish the callback and return (redirect target, session, session cookie)."""
        redirect_to = self.verify_state(state=state, marker=marker)
        if error:
            error_code = provider_error_code(error)
            logger.info("GitHub reported authorization error: %s", error_code)
            raise ProviderDeniedAuthorization(f"GitHub authorization failed ({error_code}).")
        if not code:
            raise MissingAuthorizationCode()

        token = await self._oauth.exchange_code(code, redirect_uri=redirect_uri)
        identity = await self._oauth.fetch_user_info(token.access_token)
        claims = map_claims(identity)

        session = Session(claims=claims, access_token=token.access_token)
        cookie = self._sessions.persist(session)
        logger.info("GitHub session established for login=%s", claims["login"])
        return redirect_to, session, cookie


__all__ = ["GitHubAuthFlow", "provider_error_code", "safe_redirect_target"]
