"""
MongoDB implementation of group storage using Motor.

Groups are stored one document per group (see documents.GroupDocument).

Transactions need a replica set (a single-node one is enough). Each
run_in_transaction call opens one session configured with the most
conservative settings available (majority read concern, majority write
concern, primary read preference), so a committed transaction is visible to
every transaction started after it and survives a primary failover.
"""

from loguru import logger
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo import ReadPreference
from pymongo.client_session import TransactionOptions
from pymongo.errors import DuplicateKeyError
from pymongo.read_concern import ReadConcern
from pymongo.write_concern import WriteConcern

from txgroups.domain.errors import NotFoundError
from txgroups.domain.group import MAX_MEMBERS, Group
from txgroups.infrastructure.errors import ErrorTranslator
from txgroups.infrastructure.implementations.mongo.documents import GroupDocument
from txgroups.infrastructure.repositories.group_repository import (
    GroupRepository,
    UnitOfWork,
)
from txgroups.infrastructure.transactions import (
    bind_session,
    current_session,
    run_with_retries,
)

TRANSACTION_OPTIONS = TransactionOptions(
    read_concern=ReadConcern("majority"),
    write_concern=WriteConcern("majority"),
    read_preference=ReadPreference.PRIMARY,
)


class MongoGroupRepository(GroupRepository):
    """
    MongoDB implementation of GroupRepository.

    Args:
        collection: Motor collection holding group documents
        max_members: Capacity used when regenerating stored groups
    """

    # A missing document is detected from find_one/replace_one results,
    # so no driver exception means "not found".
    errors = ErrorTranslator(already_exists=(DuplicateKeyError,))

    def __init__(
        self,
        collection: AsyncIOMotorCollection,
        max_members: int = MAX_MEMBERS,
    ):
        self._collection = collection
        self._client = collection.database.client
        self.max_members = max_members

        logger.info(
            f"Initialized MongoGroupRepository with collection={collection.name}"
        )

    @classmethod
    def from_uri(
        cls,
        uri: str,
        database: str,
        collection: str,
        max_members: int = MAX_MEMBERS,
        timeout_ms: int = 5000,
    ) -> "MongoGroupRepository":
        """
        Connect to MongoDB and build a repository on the given collection.

        The connection is lazy: nothing is sent to the server until the
        first operation.
        """
        client: AsyncIOMotorClient = AsyncIOMotorClient(
            uri, serverSelectionTimeoutMS=timeout_ms
        )
        return cls(client[database][collection], max_members=max_members)

    def close(self) -> None:
        """Close the underlying client."""
        self._client.close()
        logger.info("Closed MongoDB client")

    async def create(self, group: Group) -> None:
        """Insert a new group document."""
        doc = GroupDocument.from_group(group)

        with self.errors.translate_errors("creating group"):
            await self._collection.insert_one(doc.to_mongo(), session=current_session())

        logger.debug(f"Created group {group.id}")

    async def update(self, group: Group) -> None:
        """Replace the group document with the same id."""
        doc = GroupDocument.from_group(group)

        with self.errors.translate_errors("updating group"):
            result = await self._collection.replace_one(
                {"_id": group.id}, doc.to_mongo(), session=current_session()
            )

        if result.matched_count == 0:
            raise NotFoundError(f"updating group: no group with id {group.id}")

        logger.debug(f"Updated group {group.id}")

    async def load(self, group_id: str) -> Group:
        """Find a group document by id and regenerate the group."""
        with self.errors.translate_errors("loading group"):
            raw = await self._collection.find_one(
                {"_id": group_id}, session=current_session()
            )
            if raw is None:
                raise NotFoundError(f"loading group: no group with id {group_id}")

            return GroupDocument.from_mongo(raw).to_group(self.max_members)

    async def run_in_transaction(
        self, unit_of_work: UnitOfWork, max_retries: int
    ) -> None:
        """
        Run unit_of_work in a MongoDB transaction, retrying transient failures.

        One session is used for every attempt and ended on every exit path.
        """
        with self.errors.translate_errors("starting session"):
            session = await self._client.start_session(
                default_transaction_options=TRANSACTION_OPTIONS
            )

        async def attempt(attempt_number: int) -> None:
            session.start_transaction()
            try:
                with bind_session(session):
                    await unit_of_work()
                with self.errors.translate_errors("committing transaction"):
                    await session.commit_transaction()
            finally:
                if session.in_transaction:
                    await session.abort_transaction()

        try:
            await run_with_retries(attempt, max_retries)
        finally:
            await session.end_session()

