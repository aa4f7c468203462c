"""Service layer exports."""

from .auth_flow import GitHubAuthFlow, safe_redirect_target
from .claims import map_claims
from .session_store import SessionStore
from .session_cipher import SessionCipher

__all__ = [
    "GitHubAuthFlow",
    "SessionStore",
    "SessionCipher",
    "map_claims",
    "safe_redirect_target",
]
