"""
In-memory group repository for local development and tests.

Emulates the parts of a transactional document store the group service
relies on:
- writes inside a transaction are buffered and applied atomically on commit
- a transaction writing a document that another open transaction already
  wrote, or that was committed after this transaction started, fails with a
  write conflict labelled TransientTransactionError
- writes outside a transaction are applied immediately, with no isolation

State lives in the instance and is only safe to use from one event loop.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from loguru import logger

from txgroups.domain.group import MAX_MEMBERS, Group
from txgroups.domain.snapshot import GroupSnapshot
from txgroups.infrastructure.errors import TRANSIENT_TRANSACTION_LABEL, ErrorTranslator
from txgroups.infrastructure.repositories.group_repository import (
    GroupRepository,
    UnitOfWork,
)
from txgroups.infrastructure.transactions import (
    bind_session,
    current_session,
    run_with_retries,
)


class InMemoryStoreError(Exception):
    """Error raised by the in-memory store, optionally labelled."""

    def __init__(self, message: str, labels: Iterable[str] = ()):
        super().__init__(message)
        self._labels = frozenset(labels)

    def has_error_label(self, label: str) -> bool:
        return label in self._labels


class DocumentNotFound(InMemoryStoreError):
    """No document matches the given id."""


class DuplicateDocument(InMemoryStoreError):
    """A document with the given id already exists."""


class WriteConflict(InMemoryStoreError):
    """Another transaction modified the document first."""

    def __init__(self, document_id: str):
        super().__init__(
            f"write conflict on document {document_id}",
            labels=[TRANSIENT_TRANSACTION_LABEL],
        )


@dataclass
class _StoredDocument:
    snapshot: GroupSnapshot
    version: int


@dataclass
class _Transaction:
    # Commit sequence number observed when the transaction started.
    start_version: int
    writes: dict[str, GroupSnapshot] = field(default_factory=dict)
    inserts: set[str] = field(default_factory=set)


@dataclass
class _Session:
    transaction: _Transaction | None = None


class InMemoryGroupRepository(GroupRepository):
    """
    Process-local group storage with emulated transactions.

    Args:
        max_members: Capacity used when regenerating stored groups
        initial: Snapshots to store before first use, stored as-is
            (without validation) so corrupt states can be reproduced
    """

    errors = ErrorTranslator(
        not_found=(DocumentNotFound,),
        already_exists=(DuplicateDocument,),
    )

    def __init__(
        self,
        max_members: int = MAX_MEMBERS,
        initial: Iterable[GroupSnapshot] = (),
    ):
        self.max_members = max_members
        self._version = 0
        self._documents: dict[str, _StoredDocument] = {}
        self._write_owners: dict[str, _Transaction] = {}
        self.open_sessions = 0

        for snapshot in initial:
            self._apply(snapshot.id, snapshot)

        logger.info(
            f"Initialized InMemoryGroupRepository with max_members={max_members}"
        )

    async def create(self, group: Group) -> None:
        """Store a new group."""
        with self.errors.translate_errors("creating group"):
            snapshot = group.snapshot()
            transaction = self._active_transaction()

            if group.id in self._documents or (
                transaction is not None and group.id in transaction.writes
            ):
                raise DuplicateDocument(f"duplicate id {group.id}")

            if transaction is None:
                self._apply(group.id, snapshot)
                return

            self._claim(transaction, group.id)
            transaction.writes[group.id] = snapshot
            transaction.inserts.add(group.id)

    async def update(self, group: Group) -> None:
        """Overwrite a stored group."""
        with self.errors.translate_errors("updating group"):
            snapshot = group.snapshot()
            transaction = self._active_transaction()

            if transaction is None:
                if group.id not in self._documents:
                    raise DocumentNotFound(f"no document with id {group.id}")
                self._apply(group.id, snapshot)
                return

            if group.id not in self._documents and group.id not in transaction.writes:
                raise DocumentNotFound(f"no document with id {group.id}")

            self._claim(transaction, group.id)
            transaction.writes[group.id] = snapshot

    async def load(self, group_id: str) -> Group:
        """Load a group, seeing the uncommitted writes of the current transaction."""
        with self.errors.translate_errors("loading group"):
            transaction = self._active_transaction()

            if transaction is not None and group_id in transaction.writes:
                snapshot = transaction.writes[group_id]
            elif group_id in self._documents:
                snapshot = self._documents[group_id].snapshot
            else:
                raise DocumentNotFound(f"no document with id {group_id}")

            return Group.regenerate(snapshot, self.max_members)

    async def run_in_transaction(
        self, unit_of_work: UnitOfWork, max_retries: int
    ) -> None:
        """Run unit_of_work in a transaction, retrying write conflicts."""
        session = _Session()
        self.open_sessions += 1

        async def attempt(attempt_number: int) -> None:
            transaction = _Transaction(start_version=self._version)
            session.transaction = transaction
            try:
                with bind_session(session):
                    await unit_of_work()
                with self.errors.translate_errors("committing transaction"):
                    self._commit(transaction)
            finally:
                self._release(transaction)
                session.transaction = None

        try:
            await run_with_retries(attempt, max_retries)
        finally:
            self.open_sessions -= 1

    def _active_transaction(self) -> _Transaction | None:
        session = current_session()
        if isinstance(session, _Session):
            return session.transaction
        return None

    def _claim(self, transaction: _Transaction, document_id: str) -> None:
        owner = self._write_owners.get(document_id)
        if owner is not None and owner is not transaction:
            raise WriteConflict(document_id)

        stored = self._documents.get(document_id)
        if stored is not None and stored.version > transaction.start_version:
            raise WriteConflict(document_id)

        self._write_owners[document_id] = transaction

    def _commit(self, transaction: _Transaction) -> None:
        # No await points: a commit is atomic with respect to other tasks.
        for document_id in transaction.inserts:
            if document_id in self._documents:
                raise DuplicateDocument(f"duplicate id {document_id}")

        for document_id in transaction.writes:
            stored = self._documents.get(document_id)
            if stored is not None and stored.version > transaction.start_version:
                raise WriteConflict(document_id)

        for document_id, snapshot in transaction.writes.items():
            self._apply(document_id, snapshot)

    def _release(self, transaction: _Transaction) -> None:
        for document_id in transaction.writes:
            if self._write_owners.get(document_id) is transaction:
                del self._write_owners[document_id]

    def _apply(self, document_id: str, snapshot: GroupSnapshot) -> None:
        self._version += 1
        self._documents[document_id] = _StoredDocument(snapshot, self._version)
