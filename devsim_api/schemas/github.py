"""Schemas for GitHub-derived payloads."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class RepoInfo(BaseModel):
    """Repository summary handed to the Gemini issue generator."""

    repo_name: str = Field(..., description="Full name of the repository.")
    description: Optional[str] = Field(None, description="Repository description.")


__all__ = ["RepoInfo"]
