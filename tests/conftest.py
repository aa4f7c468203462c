"""Pytest configuration shared across the suite."""

try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for rootdir-less runs
    import _bootstrap  # type: ignore # noqa: F401

import pytest


@pytest.fixture
def anyio_backend() -> str:
    """Run AnyIO-marked tests on asyncio, the loop FastAPI is served on."""
    return "asyncio"


@pytest.fixture(autouse=True)
def _isolate_dependency_overrides():
    """Drop FastAPI dependency overrides left behind by a test."""
    yield
    from devsim_api.main import app

    app.dependency_overrides.clear()
