"""
FastAPI dependency utilities for injecting configuration.
"""

from fastapi import Depends

from devsim_api.core.config import AppSettings, get_settings


def get_app_settings() -> AppSettings:
    """FastAPI dependency returning the process-wide settings.

    Kept separate from ``get_settings`` so tests can override it through
    ``app.dependency_overrides`` without touching the settings cache.
    """
    return get_settings()


SettingsDependency = Depends(get_app_settings)

__all__ = ["SettingsDependency", "get_app_settings"]
