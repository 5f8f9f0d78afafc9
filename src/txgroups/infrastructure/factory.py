"""
Infrastructure factory for provider selection.

Selects the group store implementation based on configuration:
- local: in-memory store with emulated transactions (development, tests)
- mongo: MongoDB replica set

Usage:
    from txgroups.infrastructure import InfrastructureFactory
    from txgroups.config import get_settings

    # Option 1: From settings
    factory = InfrastructureFactory.from_settings(get_settings())

    # Option 2: Manual configuration
    factory = InfrastructureFactory(provider="local", max_members=5)

    repository = factory.get_group_repository()
"""

from typing import TYPE_CHECKING, Literal

from loguru import logger

from txgroups.domain.group import MAX_MEMBERS
from txgroups.infrastructure.repositories import GroupRepository

if TYPE_CHECKING:
    from txgroups.config import Settings

InfrastructureProvider = Literal["local", "mongo"]

SUPPORTED_PROVIDERS: tuple[str, ...] = ("local", "mongo")


class InfrastructureFactory:
    """
    Factory for creating infrastructure repository instances.

    Provides dependency injection for storage-agnostic operations.
    """

    def __init__(self, provider: InfrastructureProvider | None = None, **config):
        """
        Initialize infrastructure factory.

        Args:
            provider: Infrastructure provider ("local", "mongo").
                     If None, uses "local" as default.
            **config: Provider-specific configuration options
                     (max_members, mongodb_uri, mongodb_database,
                     mongodb_collection, mongodb_timeout_ms)

        Raises:
            ValueError: If provider is not supported
        """
        if provider is None:
            provider = "local"

        if provider not in SUPPORTED_PROVIDERS:
            raise ValueError(f"Unsupported provider: {provider}")

        self.provider = provider
        self.config = config

        logger.info(f"Initialized InfrastructureFactory with provider: {provider}")

    @classmethod
    def from_settings(cls, settings: "Settings") -> "InfrastructureFactory":
        """
        Create factory from Settings object.

        Args:
            settings: Application settings from config.py

        Returns:
            InfrastructureFactory configured from settings
        """
        config = {
            "max_members": settings.max_members,
            "mongodb_uri": settings.mongodb_uri,
            "mongodb_database": settings.mongodb_database,
            "mongodb_collection": settings.mongodb_collection,
            "mongodb_timeout_ms": settings.mongodb_timeout_ms,
        }

        return cls(provider=settings.infrastructure_provider, **config)

    def get_group_repository(self) -> GroupRepository:
        """
        Get group repository for configured provider.

        Each call builds a new repository. The in-memory store keeps its
        data in the instance, so callers should build it once and share it.

        Returns:
            GroupRepository implementation
        """
        max_members = self.config.get("max_members", MAX_MEMBERS)

        if self.provider == "local":
            from txgroups.infrastructure.implementations.local import (
                InMemoryGroupRepository,
            )

            return InMemoryGroupRepository(max_members=max_members)

        from txgroups.infrastructure.implementations.mongo import (
            MongoGroupRepository,
        )

        return MongoGroupRepository.from_uri(
            uri=self.config.get("mongodb_uri", "mongodb://localhost:27017"),
            database=self.config.get("mongodb_database", "txgroups"),
            collection=self.config.get("mongodb_collection", "group"),
            max_members=max_members,
            timeout_ms=self.config.get("mongodb_timeout_ms", 5000),
        )
