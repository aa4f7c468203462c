"""
Domain models for the GitHub login flow and the cookie-backed session.
"""

from datetime import datetime, timezone
from typing import Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

ClaimSet = Dict[str, str]

REQUIRED_CLAIMS = ("login", "id")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuthorizationRequest(BaseModel):
    """A single login attempt, kept in the correlation cookie until the callback."""

    state: str = Field(..., description="Opaque anti-CSRF value sent to the provider.")
    redirect_to: str = Field("/", description="Post-login destination.")
    provider_authorize_url: str = Field(..., description="Full provider consent URL.")
    issued_at: datetime = Field(default_factory=_utcnow)


class TokenExchangeResult(BaseModel):
    """Result of swapping an authorization code for an access token."""

    access_token: str = Field(..., min_length=1, repr=False)
    token_type: str = "bearer"
    scope: str = ""


class ProviderIdentity(BaseModel):
    """Fields read from the provider's user-info response; the rest are ignored."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    login: Optional[str] = None
    id: Optional[int] = None
    avatar_url: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None


class Session(BaseModel):
    """Authenticated identity carried entirely inside the session cookie."""

    claims: ClaimSet
    access_token: str = Field(..., min_length=1, repr=False)
    issued_at: datetime = Field(default_factory=_utcnow)

    @model_validator(mode="after")
    def _require_identity_claims(self) -> "Session":
        for claim in REQUIRED_CLAIMS:
            if not self.claims.get(claim):
                raise ValueError(f"Session claims must include '{claim}'.")
        if self.issued_at.tzinfo is None:
            self.issued_at = self.issued_at.replace(tzinfo=timezone.utc)
        return self


class AuthenticatedPrincipal(BaseModel):
    """The caller behind a request that presented a valid session."""

    login: str
    id: str
    claims: ClaimSet
    session: Session = Field(..., repr=False)

    @classmethod
    def from_session(cls, session: Session) -> "AuthenticatedPrincipal":
        return cls(
            login=session.claims["login"],
            id=session.claims["id"],
            claims=dict(session.claims),
            session=session,
        )

    @property
    def access_token(self) -> str:
        return self.session.access_token


class CookieDescriptor(BaseModel):
    """Keyword arguments for ``Response.set_cookie``."""

    key: str
    value: str = Field(..., repr=False)
    max_age: int
    httponly: bool = True
    secure: bool = False
    samesite: Literal["lax", "strict", "none"] = "lax"
    path: str = "/"

    def apply(self, response) -> None:
        response.set_cookie(**self.model_dump())


__all__ = [
    "AuthenticatedPrincipal",
    "AuthorizationRequest",
    "ClaimSet",
    "CookieDescriptor",
    "ProviderIdentity",
    "REQUIRED_CLAIMS",
    "Session",
    "TokenExchangeResult",
]
