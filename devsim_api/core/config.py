"""
Application configuration models and helpers.

Settings are grouped by concern (GitHub OAuth application, session cookies,
outbound HTTP, Gemini) and each group reads its own environment variables.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

import os

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_env_file(path: str = ".env") -> None:
    """Best-effort load key=value pairs from a .env file into the environment.

    This is the only .env handling: every settings group then reads the
    process environment, so values already exported win over the file.
    """
    env_path = Path(path)
    if not env_path.exists():
        return
    for raw_line in env_path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        if not key or key in os.environ:
            continue
        cleaned = value.strip().strip('"').strip("'")
        os.environ[key] = cleaned


_load_env_file()


class GitHubSettings(BaseSettings):
    """OAuth application credentials and GitHub endpoint locations."""

    model_config = SettingsConfigDict(populate_by_name=True)

    client_id: str = Field(..., validation_alias="GITHUB_CLIENT_ID")
    client_secret: str = Field(..., validation_alias="GITHUB_CLIENT_SECRET")
    authorize_url: str = Field(
        "https://github.com/login/oauth/authorize",
        validation_alias="GITHUB_AUTHORIZE_URL",
    )
    token_url: str = Field(
        "https://github.com/login/oauth/access_token",
        validation_alias="GITHUB_TOKEN_URL",
    )
    user_info_url: str = Field(
        "https://api.github.com/user",
        validation_alias="GITHUB_USER_INFO_URL",
    )
    repos_url: str = Field(
        "https://api.github.com/user/repos",
        validation_alias="GITHUB_REPOS_URL",
    )
    scope: str = Field("repo", validation_alias="GITHUB_SCOPE")
    callback_path: str = Field("/signin-github", validation_alias="GITHUB_CALLBACK_PATH")
    redirect_uri: Optional[str] = Field(
        None,
        validation_alias="GITHUB_REDIRECT_URI",
        description=(
            "Absolute callback URL registered with GitHub. Derived from the "
            "request base URL and callback path when omitted."
        ),
    )
    user_agent: str = Field("DevSimApp/1.0", validation_alias="GITHUB_USER_AGENT")

    @field_validator("callback_path")
    @classmethod
    def _normalize_callback_path(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith("/"):
            value = f"/{value}"
        return value


class SessionSettings(BaseSettings):
    """Cookie policy for the session and the OAuth correlation marker."""

    model_config = SettingsConfigDict(populate_by_name=True)

    secret: Optional[str] = Field(
        None,
        validation_alias="SESSION_SECRET",
        description="Secret used to derive the session encryption key.",
    )
    cookie_name: str = Field("devsim_session", validation_alias="SESSION_COOKIE_NAME")
    ttl_seconds: int = Field(8 * 60 * 60, validation_alias="SESSION_TTL_SECONDS")
    cookie_secure: bool = Field(False, validation_alias="SESSION_COOKIE_SECURE")
    state_ttl_seconds: int = Field(900, validation_alias="OAUTH_STATE_TTL")
    state_cookie_name: str = Field(
        "devsim_oauth_state", validation_alias="OAUTH_STATE_COOKIE_NAME"
    )

    @field_validator("ttl_seconds", "state_ttl_seconds")
    @classmethod
    def _enforce_minimum_ttl(cls, value: int) -> int:
        return max(value, 60)


class HttpSettings(BaseSettings):
    """Limits applied to the shared outbound HTTP client."""

    model_config = SettingsConfigDict(populate_by_name=True)

    timeout_seconds: float = Field(10.0, validation_alias="HTTP_TIMEOUT_SECONDS")
    max_connections: int = Field(20, validation_alias="HTTP_MAX_CONNECTIONS")


class GeminiSettings(BaseSettings):
    """Configuration for Gemini model access."""

    model_config = SettingsConfigDict(populate_by_name=True)

    api_key: Optional[str] = Field(None, validation_alias="GEMINI_API_KEY")
    model_name: str = Field("gemini-1.5-pro", validation_alias="GEMINI_MODEL_NAME")


class AppSettings(BaseSettings):
    """Root settings object for the FastAPI application."""

    model_config = SettingsConfigDict(populate_by_name=True)

    environment: str = Field("development", validation_alias="APP_ENV")
    log_level: str = Field("INFO", validation_alias="APP_LOG_LEVEL")
    github: GitHubSettings = Field(default_factory=GitHubSettings)
    session: SessionSettings = Field(default_factory=SessionSettings)
    http: HttpSettings = Field(default_factory=HttpSettings)
    gemini: GeminiSettings = Field(default_factory=GeminiSettings)

    @property
    def session_secret(self) -> str:
        """Secret for session encryption, falling back to the OAuth client secret."""
        return self.session.secret or self.github.client_secret


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()  # type: ignore[call-arg]


__all__ = [
    "AppSettings",
    "GeminiSettings",
    "GitHubSettings",
    "HttpSettings",
    "SessionSettings",
    "get_settings",
]
