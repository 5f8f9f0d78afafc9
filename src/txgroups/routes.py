"""
Routes registration for the FastAPI application.

Centralizes all router registrations for clean application setup.
"""

from fastapi import FastAPI

from txgroups.api.v1.groups.router import router as groups_router
from txgroups.api.v1.health.router import router as health_router


def register_routes(app: FastAPI) -> None:
    """
    Register all application routers.

    Args:
        app: FastAPI application instance
    """
    # Health check endpoints (no prefix, public)
    app.include_router(health_router)

    # Group endpoints (versioned API)
    app.include_router(groups_router)
