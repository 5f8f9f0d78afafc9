"""Group request and response models."""

from pydantic import BaseModel, Field

from txgroups.domain.group import Group


class CreateGroupRequest(BaseModel):
    """Request to create a group."""

    owner_id: str = Field(..., min_length=1, description="User owning the group")


class CreateGroupResponse(BaseModel):
    """Id of a newly created group."""

    id: str = Field(..., description="Group identifier")


class AddMemberRequest(BaseModel):
    """Request to add a user to a group."""

    user_id: str = Field(..., min_length=1, description="User to add")


class GroupResponse(BaseModel):
    """Current state of a group."""

    id: str = Field(..., description="Group identifier")
    owner_id: str = Field(..., description="User owning the group")
    members: list[str] = Field(..., description="Member ids in ascending order")

    @classmethod
    def from_group(cls, group: Group) -> "GroupResponse":
        return cls(id=group.id, owner_id=group.owner_id, members=group.members)
