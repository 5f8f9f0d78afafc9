"""
Group aggregate.

A group is a set of users with an owner. Invariants:

- it has at least one member and at most ``max_members`` members
- the owner is always a member
- the id is never empty

Instances are plain in-memory values. Every load from storage produces a new
instance, so a group is never shared between concurrent operations.
"""

from txgroups.domain.errors import GroupFullError
from txgroups.domain.snapshot import GroupSnapshot, validate_snapshot

# You can safely increase this value at any time. Reducing it requires making
# sure no stored group has more members than the new value.
MAX_MEMBERS = 5


class Group:
    """Group of users with bounded membership."""

    def __init__(
        self,
        group_id: str,
        owner_id: str,
        members: set[str],
        max_members: int = MAX_MEMBERS,
    ):
        # Callers go through create() or regenerate(), which validate first.
        self._id = group_id
        self._owner_id = owner_id
        self._members = set(members)
        self._max_members = max_members

    @classmethod
    def create(
        cls, group_id: str, owner_id: str, max_members: int = MAX_MEMBERS
    ) -> "Group":
        """
        Create a new group whose only member is its owner.

        Args:
            group_id: Unique group identifier
            owner_id: User owning the group
            max_members: Capacity of the group

        Returns:
            New group

        Raises:
            ValueError: If the id or owner id is empty or the capacity is
                not positive
        """
        if not group_id:
            raise ValueError("group id cannot be empty")
        if not owner_id:
            raise ValueError("owner id cannot be empty")
        if max_members < 1:
            raise ValueError(f"max_members must be positive, got {max_members}")

        return cls(group_id, owner_id, {owner_id}, max_members)

    @classmethod
    def regenerate(
        cls, snapshot: GroupSnapshot, max_members: int = MAX_MEMBERS
    ) -> "Group":
        """
        Recreate a group from a snapshot, validating every invariant.

        Raises:
            InvalidSnapshotError: If the snapshot would produce an invalid group
        """
        validate_snapshot(snapshot, max_members)
        return cls(snapshot.id, snapshot.owner_id, set(snapshot.members), max_members)

    @property
    def id(self) -> str:
        return self._id

    @property
    def owner_id(self) -> str:
        return self._owner_id

    @property
    def members(self) -> list[str]:
        """Member ids in ascending order."""
        return sorted(self._members)

    @property
    def max_members(self) -> int:
        return self._max_members

    @property
    def is_full(self) -> bool:
        return len(self._members) >= self._max_members

    def is_member(self, user_id: str) -> bool:
        return user_id in self._members

    def add_member(self, user_id: str) -> None:
        """
        Add a user to the group.

        Adding a user that is already a member is a no-op.

        Raises:
            ValueError: If user_id is empty
            GroupFullError: If the group is already full
        """
        if not user_id:
            raise ValueError("user id cannot be empty")

        if user_id in self._members:
            return

        if self.is_full:
            raise GroupFullError(
                f"group is full ({len(self._members)}/{self._max_members} members)"
            )

        self._members.add(user_id)

    def snapshot(self) -> GroupSnapshot:
        """Flat representation of the group, suitable for persistence."""
        return GroupSnapshot(
            id=self._id,
            owner_id=self._owner_id,
            members=tuple(self.members),
        )

    def __repr__(self) -> str:
        return (
            f"Group(id={self._id!r}, owner_id={self._owner_id!r}, "
            f"members={self.members!r})"
        )
