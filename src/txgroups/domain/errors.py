"""
Domain error taxonomy.

Every error that crosses the storage port is one of a small, closed set of
kinds. Callers compare errors by kind (or by class), never by identity:

    try:
        await service.add_user_to_group(user_id, group_id)
    except DomainError as e:
        if e.kind is ErrorKind.GROUP_FULL:
            ...
"""

from enum import StrEnum
from typing import Self


class ErrorKind(StrEnum):
    """Closed set of domain error kinds."""

    GROUP_FULL = "group_full"
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    TRANSIENT_TRANSACTION = "transient_transaction"
    RETRIES_EXHAUSTED = "retries_exhausted"
    INVALID_SNAPSHOT = "invalid_snapshot"
    STORAGE = "storage"


class SnapshotViolation(StrEnum):
    """Reason a snapshot could not be turned back into a group."""

    EMPTY_ID = "empty id"
    EMPTY_OWNER_ID = "empty owner id"
    EMPTY_MEMBERS = "empty members"
    TOO_MANY_MEMBERS = "too many members"
    OWNER_NOT_MEMBER = "owner is not a member"
    # Stored document has a field of the wrong type, e.g. a numeric member id.
    MALFORMED_DOCUMENT = "malformed document"


class DomainError(Exception):
    """
    Base class for all domain errors.

    Attributes:
        kind: Error kind, fixed per subclass
    """

    kind: ErrorKind = ErrorKind.STORAGE
    default_message: str = "storage failure"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def with_context(self, context: str) -> Self:
        """
        Return a copy of this error prefixed with operation context.

        The copy keeps the same class (and therefore the same kind) and has
        this error as its ``__cause__`` once raised with ``from``.

        Args:
            context: Description of the operation that failed

        Returns:
            New error of the same type
        """
        enriched = self._copy(f"{context}: {self.message}")
        enriched.__cause__ = self
        return enriched

    def _copy(self, message: str) -> Self:
        return type(self)(message)


class GroupFullError(DomainError):
    """The group already has the maximum number of members."""

    kind = ErrorKind.GROUP_FULL
    default_message = "group is full"


class NotFoundError(DomainError):
    """The referenced group does not exist."""

    kind = ErrorKind.NOT_FOUND
    default_message = "not found"


class AlreadyExistsError(DomainError):
    """A group with the same id is already stored."""

    kind = ErrorKind.ALREADY_EXISTS
    default_message = "already exists"


class TransientTransactionError(DomainError):
    """The transaction lost a write race and can be retried from scratch."""

    kind = ErrorKind.TRANSIENT_TRANSACTION
    default_message = "transient transaction failure"


class RetriesExhaustedError(DomainError):
    """The transaction could not commit within the configured retry bound."""

    kind = ErrorKind.RETRIES_EXHAUSTED
    default_message = "too many transaction retries"


class StorageError(DomainError):
    """Opaque storage failure; details are only logged."""

    kind = ErrorKind.STORAGE
    default_message = "storage failure"


class InvalidSnapshotError(DomainError):
    """
    Persisted state does not describe a valid group.

    Attributes:
        violation: Which invariant the snapshot breaks
    """

    kind = ErrorKind.INVALID_SNAPSHOT
    default_message = "invalid snapshot"

    def __init__(self, violation: SnapshotViolation, message: str | None = None):
        self.violation = violation
        super().__init__(message or f"invalid snapshot: {violation}")

    def _copy(self, message: str) -> Self:
        return type(self)(self.violation, message)
