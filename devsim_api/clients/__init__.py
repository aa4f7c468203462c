"""Expose constructed client wrappers."""

from .gemini import GeminiClient
from .github_api import DownstreamResponse, GitHubApiClient
from .github_auth import GitHubOAuthClient, OAuthStateEncoder

__all__ = [
    "DownstreamResponse",
    "GeminiClient",
    "GitHubApiClient",
    "GitHubOAuthClient",
    "OAuthStateEncoder",
]
