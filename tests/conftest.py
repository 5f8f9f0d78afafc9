"""Global pytest configuration and fixtures for all tests."""

import os

import pytest

from txgroups.infrastructure.implementations.local import InMemoryGroupRepository
from txgroups.services.groups import GroupService


class SequentialIds:
    """Id generator returning group_0001, group_0002, ..."""

    def __init__(self, prefix: str = "group"):
        self.prefix = prefix
        self.count = 0

    def new_id(self) -> str:
        self.count += 1
        return f"{self.prefix}_{self.count:04d}"


@pytest.fixture(scope="session", autouse=True)
def set_test_env_vars():
    """
    Set environment variables for testing.

    Keeps every test on the in-memory store and with default group limits,
    whatever the developer's .env says.
    """
    original_env = {}

    test_env_vars = {
        "INFRASTRUCTURE_PROVIDER": "local",
        "MAX_MEMBERS": "5",
        "TRANSACTIONS_ENABLED": "true",
        "TRANSACTION_MAX_RETRIES": "10",
        "PRE_WRITE_DELAY_SECONDS": "0",
        "ENABLE_DOCS": "false",
    }

    for key, value in test_env_vars.items():
        original_env[key] = os.environ.get(key)
        os.environ[key] = value

    yield

    for key, original_value in original_env.items():
        if original_value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = original_value


@pytest.fixture
def repository() -> InMemoryGroupRepository:
    """Empty in-memory group repository."""
    return InMemoryGroupRepository(max_members=5)


@pytest.fixture
def service(repository: InMemoryGroupRepository) -> GroupService:
    """Group service backed by the in-memory repository."""
    return GroupService(
        repository=repository,
        id_generator=SequentialIds(),
        max_retries=10,
    )
