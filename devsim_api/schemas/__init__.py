"""Public schema exports."""

from .auth import CurrentUser
from .github import RepoInfo

__all__ = [
    "CurrentUser",
    "RepoInfo",
]
