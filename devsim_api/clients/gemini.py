"""Client wrapper for Google Gemini models.

Only configuration lives here for now; repository-driven issue generation
will consume :class:`devsim_api.schemas.RepoInfo` payloads once it exists.
"""

from __future__ import annotations

import logging

import google.generativeai as genai

from devsim_api.core.config import GeminiSettings

logger = logging.getLogger(__name__)


class GeminiClient:
    """Holds a configured Gemini model handle."""

    def __init__(self, settings: GeminiSettings) -> None:
        if not settings.api_key:
            raise ValueError("Gemini API key must be provided.")
        self._settings = settings
        # Configure the global client once per process.
        genai.configure(api_key=settings.api_key)
        logger.info("Gemini client configured for model %s", settings.model_name)

    @property
    def model_name(self) -> str:
        return self._settings.model_name


__all__ = ["GeminiClient"]
