"""
Domain layer - business logic and rules.

This package contains:
- Group: the bounded-membership aggregate
- GroupSnapshot: its flat, persistable state
- Errors: the closed domain error taxonomy
"""

from txgroups.domain.errors import (
    AlreadyExistsError,
    DomainError,
    ErrorKind,
    GroupFullError,
    InvalidSnapshotError,
    NotFoundError,
    RetriesExhaustedError,
    SnapshotViolation,
    StorageError,
    TransientTransactionError,
)
from txgroups.domain.group import MAX_MEMBERS, Group
from txgroups.domain.snapshot import GroupSnapshot

__all__ = [
    "MAX_MEMBERS",
    "AlreadyExistsError",
    "DomainError",
    "ErrorKind",
    "Group",
    "GroupFullError",
    "GroupSnapshot",
    "InvalidSnapshotError",
    "NotFoundError",
    "RetriesExhaustedError",
    "SnapshotViolation",
    "StorageError",
    "TransientTransactionError",
]
