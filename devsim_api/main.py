"""
FastAPI application entrypoint for the DevSim API.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from http import HTTPStatus

from fastapi import FastAPI

from devsim_api.api.routes import handle_github_callback
from devsim_api.api.routes import router as api_router
from devsim_api.core.config import get_settings
from devsim_api.core.logging import configure_logging
from devsim_api.dependencies import close_http_client


@asynccontextmanager
async def _lifespan(app: FastAPI):
    yield
    await close_http_client()


def create_app() -> FastAPI:
    """Factory for the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="DevSim API",
        version="0.1.0",
        description="GitHub sign-in with a cookie-held session and repository proxy.",
        lifespan=_lifespan,
    )
    app.include_router(api_router, prefix="/api")
    app.add_api_route(
        settings.github.callback_path,
        handle_github_callback,
        methods=["GET"],
        status_code=HTTPStatus.FOUND,
        name="github_callback",
    )
    return app


app = create_app()

__all__ = ["app", "create_app"]
