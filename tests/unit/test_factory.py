"""Tests for infrastructure factory."""

from unittest.mock import patch

import pytest

from txgroups.config import Settings
from txgroups.infrastructure import InfrastructureFactory
from txgroups.infrastructure.implementations.local import InMemoryGroupRepository


def test_factory_defaults_to_local():
    """Test factory uses the in-memory store when no provider is given."""
    factory = InfrastructureFactory()

    repository = factory.get_group_repository()

    assert factory.provider == "local"
    assert isinstance(repository, InMemoryGroupRepository)


def test_factory_from_settings():
    """Test factory passes group capacity from settings."""
    with patch.dict("os.environ", {"INFRASTRUCTURE_PROVIDER": "local", "MAX_MEMBERS": "7"}):
        settings = Settings()

    repository = InfrastructureFactory.from_settings(settings).get_group_repository()

    assert isinstance(repository, InMemoryGroupRepository)
    assert repository.max_members == 7


def test_factory_rejects_unknown_provider():
    """Test factory validates provider names."""
    with pytest.raises(ValueError, match="Unsupported provider"):
        InfrastructureFactory(provider="dynamodb")


def test_factory_builds_mongo_repository():
    """Test the mongo provider builds a repository from the connection settings."""
    factory = InfrastructureFactory(
        provider="mongo",
        max_members=5,
        mongodb_uri="mongodb://db:27017/?replicaSet=rs",
        mongodb_database="groups_db",
        mongodb_collection="groups",
        mongodb_timeout_ms=1500,
    )

    with patch(
        "txgroups.infrastructure.implementations.mongo.MongoGroupRepository.from_uri"
    ) as from_uri:
        repository = factory.get_group_repository()

    from_uri.assert_called_once_with(
        uri="mongodb://db:27017/?replicaSet=rs",
        database="groups_db",
        collection="groups",
        max_members=5,
        timeout_ms=1500,
    )
    assert repository is from_uri.return_value


def test_factory_local_repositories_are_separate():
    """Test each call builds a fresh in-memory store."""
    factory = InfrastructureFactory(provider="local")

    assert factory.get_group_repository() is not factory.get_group_repository()
