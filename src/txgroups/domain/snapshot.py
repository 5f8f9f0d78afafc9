"""Flat, persistable state of a group."""

from dataclasses import dataclass

from txgroups.domain.errors import InvalidSnapshotError, SnapshotViolation


@dataclass(frozen=True)
class GroupSnapshot:
    """
    Internal state of a group.

    Attributes:
        id: Group identifier
        owner_id: Owner identifier
        members: Member identifiers in ascending order
    """

    id: str
    owner_id: str
    members: tuple[str, ...]


def validate_snapshot(snapshot: GroupSnapshot, max_members: int) -> None:
    """
    Check a snapshot describes a valid group.

    This is the only gate between persisted state (which may have been edited
    by hand or corrupted) and live groups.

    Raises:
        InvalidSnapshotError: With the first violation found
    """
    if not snapshot.id:
        raise InvalidSnapshotError(SnapshotViolation.EMPTY_ID)

    if not snapshot.owner_id:
        raise InvalidSnapshotError(SnapshotViolation.EMPTY_OWNER_ID)

    if not snapshot.members:
        raise InvalidSnapshotError(SnapshotViolation.EMPTY_MEMBERS)

    # Raw length: duplicated ids in stored state count against the capacity.
    member_count = len(snapshot.members)
    if member_count > max_members:
        raise InvalidSnapshotError(
            SnapshotViolation.TOO_MANY_MEMBERS,
            f"invalid snapshot: too many members ({member_count} > {max_members})",
        )

    if snapshot.owner_id not in snapshot.members:
        raise InvalidSnapshotError(
            SnapshotViolation.OWNER_NOT_MEMBER,
            f"invalid snapshot: owner ({snapshot.owner_id}) is not a member "
            f"({list(snapshot.members)})",
        )
