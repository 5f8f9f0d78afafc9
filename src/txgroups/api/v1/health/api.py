"""
Health check endpoints.

Provides health check endpoints for monitoring service status.
"""

from fastapi import APIRouter

from txgroups import __version__
from txgroups.api.v1.health.models import HealthResponse
from txgroups.di import SettingsDep

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: SettingsDep) -> HealthResponse:
    """
    Health check endpoint.

    Returns:
        Service status, version and configured store provider
    """
    return HealthResponse(
        status="ok",
        version=__version__,
        provider=settings.infrastructure_provider,
        message="Service is healthy",
    )
