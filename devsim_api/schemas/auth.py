"""Schemas related to the signed-in user."""

from __future__ import annotations

from typing import Dict

from pydantic import BaseModel


class CurrentUser(BaseModel):
    """Claims of the signed-in user; the access token is never exposed."""

    login: str
    id: str
    claims: Dict[str, str]


__all__ = ["CurrentUser"]
