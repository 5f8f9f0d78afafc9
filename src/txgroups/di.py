"""
Dependency injection container for txgroups.

This module provides centralized dependency injection using FastAPI's Depends
with typing.Annotated for clean type hints throughout the application.
"""

from typing import Annotated

from fastapi import Depends, Request

from txgroups.config import Settings, get_settings
from txgroups.infrastructure import InfrastructureFactory
from txgroups.infrastructure.repositories import GroupRepository
from txgroups.services.groups import GroupService
from txgroups.services.ids import UUID4Generator

# ============================================================================
# Settings Dependencies
# ============================================================================

SettingsDep = Annotated[Settings, Depends(get_settings)]
"""Injected Settings instance (cached via lru_cache)."""


# ============================================================================
# Group Service Dependencies
# ============================================================================


def build_group_service(settings: Settings) -> GroupService:
    """
    Build the group service and its repository from settings.

    Called once per process by the application lifespan: the in-memory
    store keeps its data in the repository instance and the MongoDB
    repository owns a connection pool, so neither is built per request.

    Args:
        settings: Application settings

    Returns:
        Configured group service
    """
    factory = InfrastructureFactory.from_settings(settings)
    repository: GroupRepository = factory.get_group_repository()

    return GroupService(
        repository=repository,
        id_generator=UUID4Generator(),
        max_retries=settings.transaction_max_retries,
    )


def get_group_service(request: Request) -> GroupService:
    """
    Get the group service created at startup.

    Args:
        request: Current request (injected)

    Returns:
        Process-wide group service
    """
    return request.app.state.group_service


GroupServiceDep = Annotated[GroupService, Depends(get_group_service)]
"""Injected GroupService instance."""
