"""
Cookie-backed session storage.

The cookie is the whole session: claims, the GitHub access token and the
issuance time are serialized to JSON and encrypted with Fernet, so the
browser holds an opaque value it can neither read nor alter.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from pydantic import ValidationError

from devsim_api.core.config import SessionSettings
from devsim_api.core.errors import ExpiredSession, InvalidSession, NoSession
from devsim_api.models.auth import CookieDescriptor, Session
from devsim_api.services.session_cipher import SessionCipher

logger = logging.getLogger(__name__)


class SessionStore:
    """Persist and load :class:`Session` objects through an encrypted cookie."""

    def __init__(self, *, settings: SessionSettings, cipher: SessionCipher) -> None:
        self._settings = settings
        self._cipher = cipher

    @property
    def cookie_name(self) -> str:
        return self._settings.cookie_name

    @property
    def ttl(self) -> timedelta:
        return timedelta(seconds=self._settings.ttl_seconds)

    def persist(self, session: Session) -> CookieDescriptor:
        """Serialize ``session`` into a cookie the caller attaches to a response."""
        value = self._cipher.seal(session.model_dump_json())
        return CookieDescriptor(
            key=self._settings.cookie_name,
            value=value,
            max_age=self._settings.ttl_seconds,
            secure=self._settings.cookie_secure,
            samesite="lax",
        )

    def load(self, value: Optional[str], *, now: Optional[datetime] = None) -> Session:
        """Reverse :meth:`persist`, failing distinctly for absent, tampered and expired cookies."""
        if not value:
            raise NoSession()

        raw = self._cipher.unseal(value)
        try:
            session = Session.model_validate_json(raw)
        except ValidationError as exc:
            logger.info("Rejected session cookie with an invalid payload")
            raise InvalidSession() from exc

        current = now or datetime.now(timezone.utc)
        if session.issued_at + self.ttl <= current:
            raise ExpiredSession()
        return session

    def clear(self) -> CookieDescriptor:
        """Cookie that removes the session from the browser."""
        return CookieDescriptor(
            key=self._settings.cookie_name,
            value="",
            max_age=0,
            secure=self._settings.cookie_secure,
            samesite="lax",
        )


__all__ = ["SessionStore"]
