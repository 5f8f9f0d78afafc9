"""MongoDB document layout for groups."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from txgroups.domain.errors import InvalidSnapshotError, SnapshotViolation
from txgroups.domain.group import Group
from txgroups.domain.snapshot import GroupSnapshot


class GroupDocument(BaseModel):
    """
    Group as stored in MongoDB.

    Layout: {"_id": str, "owner_id": str, "members": [str, ...]}

    Missing or null owner and members decode as empty values so that the
    group invariants, not the document schema, decide whether a stored group
    is valid (see Group.regenerate).
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(alias="_id")
    owner_id: str = ""
    members: list[str] = Field(default_factory=list)

    @field_validator("owner_id", mode="before")
    @classmethod
    def null_owner_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("members", mode="before")
    @classmethod
    def null_members_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @classmethod
    def from_group(cls, group: Group) -> "GroupDocument":
        snapshot = group.snapshot()
        return cls(
            id=snapshot.id,
            owner_id=snapshot.owner_id,
            members=list(snapshot.members),
        )

    @classmethod
    def from_mongo(cls, raw: dict[str, Any]) -> "GroupDocument":
        """
        Decode a raw MongoDB document.

        Raises:
            InvalidSnapshotError: If a field has the wrong type
        """
        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            fields = sorted({".".join(str(loc) for loc in error["loc"]) for error in e.errors()})
            raise InvalidSnapshotError(
                SnapshotViolation.MALFORMED_DOCUMENT,
                f"invalid snapshot: malformed document (fields: {', '.join(fields)})",
            ) from e

    def to_mongo(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)

    def to_group(self, max_members: int) -> Group:
        """
        Regenerate the group this document represents.

        Raises:
            InvalidSnapshotError: If the document breaks a group invariant
        """
        snapshot = GroupSnapshot(
            id=self.id,
            owner_id=self.owner_id,
            members=tuple(sorted(self.members)),
        )
        return Group.regenerate(snapshot, max_members)
