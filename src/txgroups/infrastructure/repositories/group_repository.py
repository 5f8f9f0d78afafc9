"""
Abstract interface for group storage.

The group service depends only on this contract. Implementations:
- MongoGroupRepository: MongoDB replica set, real transactions
- InMemoryGroupRepository: process-local store emulating transactions
"""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable

from txgroups.domain.group import MAX_MEMBERS, Group

UnitOfWork = Callable[[], Awaitable[None]]
"""Idempotent coroutine function executed inside a transaction."""


class GroupRepository(ABC):
    """
    Abstract interface for group storage operations.

    Every operation translates storage-specific failures into domain errors
    (see txgroups.domain.errors), so callers never see driver exceptions.

    Operations called from inside a unit of work passed to
    run_in_transaction join that transaction automatically.
    """

    # Capacity used to regenerate stored groups and to create new ones.
    max_members: int = MAX_MEMBERS

    @abstractmethod
    async def create(self, group: Group) -> None:
        """
        Store a new group.

        Args:
            group: Group to store

        Raises:
            AlreadyExistsError: If a group with the same id is already stored
            TransientTransactionError: If the enclosing transaction lost a
                write race and can be retried
        """
        pass

    @abstractmethod
    async def update(self, group: Group) -> None:
        """
        Overwrite a stored group.

        Args:
            group: Group to store, matched by id

        Raises:
            NotFoundError: If no group with that id is stored
            TransientTransactionError: If the enclosing transaction lost a
                write race and can be retried
        """
        pass

    @abstractmethod
    async def load(self, group_id: str) -> Group:
        """
        Load a group by id.

        Args:
            group_id: Group identifier

        Returns:
            A new Group instance, validated against the group invariants

        Raises:
            NotFoundError: If no group with that id is stored
            InvalidSnapshotError: If the stored document is corrupt
            TransientTransactionError: If the enclosing transaction lost a
                write race and can be retried
        """
        pass

    @abstractmethod
    async def run_in_transaction(
        self, unit_of_work: UnitOfWork, max_retries: int
    ) -> None:
        """
        Run unit_of_work inside a transaction, retrying transient failures.

        The unit of work MUST be idempotent: it is re-executed from scratch
        after each transient failure. It is attempted at most
        max_retries + 1 times.

        Args:
            unit_of_work: Coroutine function to run
            max_retries: Retries allowed after the first attempt

        Raises:
            RetriesExhaustedError: If every attempt failed transiently
            Exception: Whatever non-transient error the unit of work raised
        """
        pass
