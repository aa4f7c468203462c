"""Fernet sealing for values the browser must carry but never read."""

from __future__ import annotations

import base64
import hashlib

from cryptography.fernet import Fernet, InvalidToken

from devsim_api.core.errors import InvalidSession


class SessionCipher:
    """Seal session payloads with a key derived from the session secret.

    Fernet both encrypts and authenticates, so a sealed value is opaque to the
    browser and any alteration is detected on :meth:`unseal`.
    """

    def __init__(self, *, secret: str) -> None:
        if not secret:
            raise ValueError("Session secret must be provided.")
        key = base64.urlsafe_b64encode(hashlib.sha256(secret.encode("utf-8")).digest())
        self._fernet = Fernet(key)

    def seal(self, payload: str) -> str:
        return self._fernet.encrypt(payload.encode("utf-8")).decode("ascii")

    def unseal(self, sealed: str) -> str:
        """Return the payload, or raise :class:`InvalidSession` if it was not sealed with this key."""
        try:
            return self._fernet.decrypt(sealed.encode("utf-8")).decode("utf-8")
        except InvalidToken as exc:
            raise InvalidSession() from exc


__all__ = ["SessionCipher"]
