"""
Group use cases.

Adding a member is a read-modify-write: load the group, check capacity,
write it back. Two concurrent calls can both load the group before either
writes, both see free capacity and both write, leaving the group with more
members than allowed (or losing one of the additions).

With transactions enabled, the store detects the write-write conflict and
reports a transient failure; the retry engine re-runs the whole unit of work,
which re-reads the updated group and re-evaluates capacity. No application
lock is involved.
"""

import asyncio
from dataclasses import dataclass

from loguru import logger

from txgroups.domain.errors import DomainError
from txgroups.domain.group import Group
from txgroups.infrastructure.repositories import GroupRepository
from txgroups.services.ids import IdGenerator, UUID4Generator

DEFAULT_MAX_RETRIES = 10


@dataclass(frozen=True)
class AddMemberOptions:
    """
    Options for GroupService.add_user_to_group.

    Attributes:
        transactions_enabled: Run the update inside a retried transaction
        pre_write_delay: Seconds to wait between loading and writing the
            group; only useful in tests, to widen the race window
    """

    transactions_enabled: bool = False
    pre_write_delay: float = 0.0


class GroupService:
    """
    Application service for group use cases.

    Args:
        repository: Group storage
        id_generator: Source of new group ids
        max_retries: Transaction retries allowed after the first attempt
    """

    def __init__(
        self,
        repository: GroupRepository,
        id_generator: IdGenerator | None = None,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ):
        self.repository = repository
        self.id_generator = id_generator or UUID4Generator()
        self.max_retries = max_retries

        logger.info(
            f"Initialized GroupService with max_members={self.max_members}, "
            f"max_retries={max_retries}"
        )

    @property
    def max_members(self) -> int:
        """Capacity of new groups, the one the repository enforces on load."""
        return self.repository.max_members

    async def create_group(self, owner_id: str) -> str:
        """
        Create a group owned by owner_id.

        Returns:
            Id of the new group

        Raises:
            ValueError: If owner_id is empty
            DomainError: If the group cannot be stored
        """
        group_id = self.id_generator.new_id()
        group = Group.create(group_id, owner_id, self.max_members)

        try:
            await self.repository.create(group)
        except DomainError as e:
            raise e.with_context("creating group") from e

        logger.info(f"Created group {group_id} owned by {owner_id}")
        return group_id

    async def get_group(self, group_id: str) -> Group:
        """
        Get a group by id.

        Raises:
            NotFoundError: If the group does not exist
        """
        try:
            return await self.repository.load(group_id)
        except DomainError as e:
            raise e.with_context("getting group") from e

    async def add_user_to_group(
        self,
        user_id: str,
        group_id: str,
        options: AddMemberOptions | None = None,
    ) -> None:
        """
        Add a user to a group, preserving the group capacity.

        Adding a user that is already a member succeeds without changes.

        Raises:
            GroupFullError: If the group is full
            NotFoundError: If the group does not exist
            RetriesExhaustedError: If the transaction kept conflicting
        """
        options = options or AddMemberOptions()

        async def add_member() -> None:
            group = await self.repository.load(group_id)
            group.add_member(user_id)

            if options.pre_write_delay > 0:
                await asyncio.sleep(options.pre_write_delay)

            await self.repository.update(group)

        try:
            if options.transactions_enabled:
                await self.repository.run_in_transaction(add_member, self.max_retries)
            else:
                await add_member()
        except DomainError as e:
            raise e.with_context(f"adding user {user_id} to group {group_id}") from e

        logger.info(f"Added user {user_id} to group {group_id}")
