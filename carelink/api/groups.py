"""
Community group endpoints
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from carelink.core.database import get_db
from carelink.core.dependencies import get_current_user
from carelink.models.user import User
from carelink.schemas.common import payload_of, serialize, success
from carelink.schemas.community import GroupCreate, GroupResponse, InviteTokenJoin
from carelink.services.group_service import GroupService

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_group(
        group_data: GroupCreate,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    group = GroupService(db).create_group(current_user.id, payload_of(group_data))
    return success(serialize(GroupResponse, group), "Group created successfully")


@router.get("/joined")
async def list_joined_groups(
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    groups = GroupService(db).get_joined_groups(current_user.id)
    return success([serialize(GroupResponse, g) for g in groups])


@router.get("/available")
async def list_available_groups(
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    groups = GroupService(db).get_available_groups(current_user.id)
    return success([serialize(GroupResponse, g) for g in groups])


@router.get("/invite/{token}")
async def find_group_by_invite(
        token: str,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    group = GroupService(db).find_by_invite_token(token)
    return success(serialize(GroupResponse, group))


@router.post("/join-by-token")
async def join_group_by_invite(
        invite: InviteTokenJoin,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    group = GroupService(db).join_by_invite_token(current_user.id, payload_of(invite))
    return success({"groupId": group.id, "groupName": group.name}, f"Joined {group.name} successfully")


@router.post("/{group_id}/join")
async def join_group(
        group_id: int,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    GroupService(db).join_group(group_id, current_user.id)
    return success({"groupId": group_id}, "Joined group successfully")


@router.post("/{group_id}/leave")
async def leave_group(
        group_id: int,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    GroupService(db).leave_group(group_id, current_user.id)
    return success({"groupId": group_id}, "Left group successfully")


@router.get("/{group_id}/invite-token")
async def get_invite_token(
        group_id: int,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    """
    Invite token for a group (owner only)
    """
    token = GroupService(db).get_invite_token(group_id, current_user.id)
    return success({"groupId": group_id, "inviteToken": token})
