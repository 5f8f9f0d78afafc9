"""
Group API endpoints.

Domain errors raised by the group service are not caught here: the global
domain error handler turns them into problem details by kind
(group full -> 409, not found -> 404, retries exhausted -> 503, ...).
"""

from fastapi import APIRouter, status

from txgroups.api.v1.groups.models import (
    AddMemberRequest,
    CreateGroupRequest,
    CreateGroupResponse,
    GroupResponse,
)
from txgroups.di import GroupServiceDep, SettingsDep
from txgroups.services.groups import AddMemberOptions

router = APIRouter()


@router.post(
    "",
    response_model=CreateGroupResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a group",
)
async def create_group(
    request: CreateGroupRequest,
    service: GroupServiceDep,
) -> CreateGroupResponse:
    """Create a group whose only member is its owner."""
    group_id = await service.create_group(request.owner_id)
    return CreateGroupResponse(id=group_id)


@router.get(
    "/{group_id}",
    response_model=GroupResponse,
    summary="Get a group",
)
async def get_group(group_id: str, service: GroupServiceDep) -> GroupResponse:
    """Get the owner and members of a group."""
    group = await service.get_group(group_id)
    return GroupResponse.from_group(group)


@router.post(
    "/{group_id}/members",
    response_model=GroupResponse,
    summary="Add a user to a group",
    description="""
    Add a user to a group without ever exceeding the group capacity.

    Adding a user that is already a member succeeds and changes nothing.

    When transactions are enabled (TRANSACTIONS_ENABLED, on by default), the
    load-check-write sequence runs in a database transaction that is retried
    on write conflicts, so concurrent requests cannot overfill the group.
    """,
)
async def add_member(
    group_id: str,
    request: AddMemberRequest,
    service: GroupServiceDep,
    settings: SettingsDep,
) -> GroupResponse:
    """Add a user to a group and return the updated group."""
    options = AddMemberOptions(
        transactions_enabled=settings.transactions_enabled,
        pre_write_delay=settings.pre_write_delay_seconds,
    )
    await service.add_user_to_group(request.user_id, group_id, options)

    group = await service.get_group(group_id)
    return GroupResponse.from_group(group)
