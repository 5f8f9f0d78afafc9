"""Abstract repository interfaces for infrastructure operations."""

from txgroups.infrastructure.repositories.group_repository import (
    GroupRepository,
    UnitOfWork,
)

__all__ = [
    "GroupRepository",
    "UnitOfWork",
]
