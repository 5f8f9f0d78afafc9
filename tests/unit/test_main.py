"""Tests for main application entry point."""

import logging


def test_main_app_exists():
    """Test that main module exports a configured app."""
    from txgroups.main import app

    paths = app.openapi()["paths"]
    assert "/health" in paths
    assert "/groups" in paths
    assert "/groups/{group_id}/members" in paths


def test_main_intercepts_library_logging():
    """Test importing main redirects uvicorn logs to loguru."""
    import txgroups.main  # noqa: F401
    from txgroups.core.logging import InterceptHandler

    assert isinstance(logging.getLogger("uvicorn").handlers[0], InterceptHandler)
