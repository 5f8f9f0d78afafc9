"""Tests for group snapshots and their validation."""

import pytest

from txgroups.domain import (
    ErrorKind,
    Group,
    GroupSnapshot,
    InvalidSnapshotError,
    SnapshotViolation,
)


def test_snapshot_has_sorted_members():
    """Test snapshots list members in ascending order."""
    group = Group.create("g1", "owner")
    group.add_member("bob")
    group.add_member("alice")

    assert group.snapshot() == GroupSnapshot(
        id="g1", owner_id="owner", members=("alice", "bob", "owner")
    )


@pytest.mark.parametrize("extra_members", [[], ["alice"], ["zed", "bob", "alice", "kim"]])
def test_regenerate_snapshot_roundtrip(extra_members):
    """Test regenerating a snapshot yields an identical group."""
    group = Group.create("g1", "owner")
    for user_id in extra_members:
        group.add_member(user_id)

    regenerated = Group.regenerate(group.snapshot())

    assert regenerated.id == group.id
    assert regenerated.owner_id == group.owner_id
    assert regenerated.members == group.members
    assert regenerated.snapshot() == group.snapshot()


def test_regenerated_group_is_independent():
    """Test mutating a regenerated group does not affect the snapshot."""
    snapshot = GroupSnapshot(id="g1", owner_id="owner", members=("owner",))

    group = Group.regenerate(snapshot)
    group.add_member("alice")

    assert snapshot.members == ("owner",)
    assert Group.regenerate(snapshot).members == ["owner"]


@pytest.mark.parametrize(
    ("snapshot", "violation"),
    [
        (
            GroupSnapshot(id="", owner_id="owner", members=("owner",)),
            SnapshotViolation.EMPTY_ID,
        ),
        (
            GroupSnapshot(id="g1", owner_id="", members=("owner",)),
            SnapshotViolation.EMPTY_OWNER_ID,
        ),
        (
            GroupSnapshot(id="g1", owner_id="owner", members=()),
            SnapshotViolation.EMPTY_MEMBERS,
        ),
        (
            GroupSnapshot(
                id="g1", owner_id="owner", members=("a", "b", "c", "d", "e", "owner")
            ),
            SnapshotViolation.TOO_MANY_MEMBERS,
        ),
        (
            GroupSnapshot(id="g1", owner_id="owner", members=("alice", "bob")),
            SnapshotViolation.OWNER_NOT_MEMBER,
        ),
    ],
)
def test_regenerate_invalid_snapshot(snapshot, violation):
    """Test each broken invariant is reported with its own violation."""
    with pytest.raises(InvalidSnapshotError) as exc_info:
        Group.regenerate(snapshot, max_members=5)

    assert exc_info.value.kind is ErrorKind.INVALID_SNAPSHOT
    assert exc_info.value.violation is violation


def test_regenerate_counts_duplicate_members():
    """Test duplicated stored ids are not collapsed before the capacity check."""
    snapshot = GroupSnapshot(
        id="g1", owner_id="owner", members=("alice",) * 6 + ("owner",)
    )

    with pytest.raises(InvalidSnapshotError) as exc_info:
        Group.regenerate(snapshot, max_members=5)

    assert exc_info.value.violation is SnapshotViolation.TOO_MANY_MEMBERS


def test_regenerate_respects_capacity_argument():
    """Test the capacity given to regenerate is the one enforced."""
    snapshot = GroupSnapshot(id="g1", owner_id="owner", members=("alice", "owner"))

    with pytest.raises(InvalidSnapshotError) as exc_info:
        Group.regenerate(snapshot, max_members=1)

    assert exc_info.value.violation is SnapshotViolation.TOO_MANY_MEMBERS
    assert Group.regenerate(snapshot, max_members=2).members == ["alice", "owner"]
