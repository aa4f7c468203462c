"""Expose dependency helpers for FastAPI routers."""

from .auth import RequestContext, get_request_context, require_authenticated
from .clients import (
    close_http_client,
    get_auth_flow,
    get_gemini_client,
    get_github_api_client,
    get_github_oauth_client,
    get_http_client,
    get_oauth_state_encoder,
    get_session_store,
    get_session_cipher,
)
from .config import SettingsDependency, get_app_settings

__all__ = [
    "RequestContext",
    "SettingsDependency",
    "close_http_client",
    "get_app_settings",
    "get_auth_flow",
    "get_gemini_client",
    "get_github_api_client",
    "get_github_oauth_client",
    "get_http_client",
    "get_oauth_state_encoder",
    "get_request_context",
    "get_session_store",
    "get_session_cipher",
    "require_authenticated",
]
