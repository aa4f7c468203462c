"""
GitHub OAuth utilities.

These helpers build the consent URL, exchange authorization codes for access
tokens and fetch the signed-in user's profile.
"""

from __future__ import annotations

import base64
import binascii
import hmac
import json
import logging
from hashlib import sha256
from typing import Any, Dict
from urllib.parse import parse_qsl, urlencode

import httpx
from pydantic import ValidationError

from devsim_api.core.config import GitHubSettings
from devsim_api.core.errors import CsrfMismatch, TokenExchangeFailed, UserInfoFetchFailed
from devsim_api.models.auth import ProviderIdentity, TokenExchangeResult

logger = logging.getLogger(__name__)


class OAuthStateEncoder:
    """Sign and verify the login-attempt payload kept in the correlation cookie."""

    def __init__(self, secret_key: str) -> None:
        self._secret_key = secret_key.encode("utf-8")

    def encode(self, payload: Dict[str, Any]) -> str:
        serialized = json.dumps(payload, separators=(",", ":"), sort_keys=True, default=str)
        signature = hmac.new(self._secret_key, serialized.encode("utf-8"), sha256).digest()
        return base64.urlsafe_b64encode(signature + serialized.encode("utf-8")).decode("utf-8")

    def decode(self, token: str) -> Dict[str, Any]:
        try:
            decoded = base64.urlsafe_b64decode(token.encode("utf-8"))
        except (binascii.Error, ValueError) as exc:
            raise CsrfMismatch("OAuth state marker is malformed.") from exc
        signature, serialized = decoded[:32], decoded[32:]
        expected_signature = hmac.new(self._secret_key, serialized, sha256).digest()
        if not hmac.compare_digest(signature, expected_signature):
            raise CsrfMismatch("OAuth state marker signature is invalid.")
        try:
            payload = json.loads(serialized)
        except ValueError as exc:
            raise CsrfMismatch("OAuth state marker is malformed.") from exc
        if not isinstance(payload, dict):
            raise CsrfMismatch("OAuth state marker is malformed.")
        return payload


class GitHubOAuthClient:
    """Build GitHub authorization URLs, exchange codes and load user info."""

    def __init__(self, settings: GitHubSettings, http_client: httpx.AsyncClient) -> None:
        self._github = settings
        self._http = http_client

    def build_authorization_url(self, *, state: str, redirect_uri: str) -> str:
        """Construct the GitHub consent URL."""
        params = {
            "client_id": self._github.client_id,
            "redirect_uri": redirect_uri,
            "scope": self._github.scope,
            "state": state,
        }
        return f"{self._github.authorize_url}?{urlencode(params)}"

    async def exchange_code(self, code: str, *, redirect_uri: str) -> TokenExchangeResult:
        """Exchange an authorization code for an access token."""
        payload = {
            "client_id": self._github.client_id,
            "client_secret": self._github.client_secret,
            "code": code,
            "redirect_uri": redirect_uri,
        }
        try:
            response = await self._http.post(
                self._github.token_url,
                data=payload,
                headers={"Accept": "application/json"},
            )
        except httpx.TimeoutException as exc:
            logger.warning("GitHub token exchange timed out")
            raise TokenExchangeFailed("Token endpoint timed out.") from exc
        except httpx.HTTPError as exc:
            logger.warning("GitHub token exchange transport error: %s", type(exc).__name__)
            raise TokenExchangeFailed("Token endpoint is unreachable.") from exc

        if not response.is_success:
            logger.warning("GitHub token exchange failed (status=%s)", response.status_code)
            raise TokenExchangeFailed(
                f"Token endpoint returned status {response.status_code}."
            )

        token_payload = _parse_token_body(response)
        error = token_payload.get("error")
        if error:
            # GitHub reports bad or reused codes with 200 and an error field.
            logger.warning("GitHub token exchange rejected: %s", error)
            raise TokenExchangeFailed(f"Token endpoint rejected the code ({error}).")

        try:
            return TokenExchangeResult(
                access_token=token_payload.get("access_token") or "",
                token_type=token_payload.get("token_type") or "bearer",
                scope=token_payload.get("scope") or "",
            )
        except ValidationError as exc:
            raise TokenExchangeFailed("Token endpoint returned no access token.") from exc

    async def fetch_user_info(self, access_token: str) -> ProviderIdentity:
        """Load the profile of the user who owns ``access_token``."""
        try:
            response = await self._http.get(
                self._github.user_info_url,
                headers={
                    "Authorization": f"Bearer {access_token}",
                    "Accept": "application/json",
                    "User-Agent": self._github.user_agent,
                },
            )
        except httpx.TimeoutException as exc:
            logger.warning("GitHub user-info request timed out")
            raise UserInfoFetchFailed("User-info endpoint timed out.") from exc
        except httpx.HTTPError as exc:
            logger.warning("GitHub user-info transport error: %s", type(exc).__name__)
            raise UserInfoFetchFailed("User-info endpoint is unreachable.") from exc

        if not response.is_success:
            logger.warning("GitHub user-info request failed (status=%s)", response.status_code)
            raise UserInfoFetchFailed(
                f"User-info endpoint returned status {response.status_code}."
            )

        try:
            user = response.json()
        except ValueError as exc:
            raise UserInfoFetchFailed("User-info endpoint returned invalid JSON.") from exc
        if not isinstance(user, dict):
            raise UserInfoFetchFailed("User-info endpoint returned an unexpected payload.")

        try:
            return ProviderIdentity.model_validate(user)
        except ValidationError as exc:
            raise UserInfoFetchFailed("User-info payload has malformed fields.") from exc


def _parse_token_body(response: httpx.Response) -> Dict[str, Any]:
    content_type = response.headers.get("content-type", "")
    if "application/x-www-form-urlencoded" in content_type:
        return dict(parse_qsl(response.text))
    try:
        payload = response.json()
    except ValueError as exc:
        raise TokenExchangeFailed("Token endpoint returned an unparsable body.") from exc
    if not isinstance(payload, dict):
        raise TokenExchangeFailed("Token endpoint returned an unexpected payload.")
    return payload


__all__ = ["GitHubOAuthClient", "OAuthStateEncoder"]
