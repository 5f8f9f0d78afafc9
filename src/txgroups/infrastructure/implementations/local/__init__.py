"""Local (in-process) infrastructure implementations package."""

from txgroups.infrastructure.implementations.local.group_repository import (
    DocumentNotFound,
    DuplicateDocument,
    InMemoryGroupRepository,
    InMemoryStoreError,
    WriteConflict,
)

__all__ = [
    "DocumentNotFound",
    "DuplicateDocument",
    "InMemoryGroupRepository",
    "InMemoryStoreError",
    "WriteConflict",
]
