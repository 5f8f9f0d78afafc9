"""
Application lifecycle management.

Handles startup and shutdown events for the FastAPI application.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from txgroups.config import get_settings
from txgroups.di import build_group_service


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Builds the group service once at startup, unless one was injected
    through create_app, and closes the store client it built at shutdown.

    Args:
        app: FastAPI application instance
    """
    logger.info(" Starting txgroups backend...")
    logger.info(f"Application version: {app.version}")

    built_here = getattr(app.state, "group_service", None) is None
    if built_here:
        app.state.group_service = build_group_service(get_settings())

    yield

    logger.info(" Shutting down txgroups backend...")

    close = getattr(app.state.group_service.repository, "close", None)
    if built_here and callable(close):
        close()
