"""
Community group and membership service
"""
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List
import logging
import secrets

from carelink.core.exceptions import ConflictError, ForbiddenError, NotFoundError
from carelink.models.group import Group, GroupMember
from carelink.schemas.community import GroupCreate, InviteTokenJoin
from carelink.validation.common import parse_payload

logger = logging.getLogger(__name__)


class GroupService:
    def __init__(self, db: Session):
        self.db = db

    def get_group(self, group_id: int) -> Group:
        group = self.db.query(Group).filter(Group.id == group_id).first()
        if not group:
            raise NotFoundError("Group not found")
        return group

    def is_member(self, group_id: int, user_id: int) -> bool:
        return self.db.query(GroupMember).filter(
            GroupMember.group_id == group_id,
            GroupMember.user_id == user_id
        ).first() is not None

    def create_group(self, user_id: int, payload: dict) -> Group:
        """Create a group; its creator becomes the first member"""
        data = parse_payload(GroupCreate, payload)

        group = Group(
            name=data.name,
            description=data.description,
            is_private=data.is_private,
            created_by=user_id,
        )
        group.members.append(GroupMember(user_id=user_id))
        self.db.add(group)
        self.db.commit()
        self.db.refresh(group)

        logger.info(f"Group created: {group.name} (ID: {group.id}, owner: {user_id})")
        return group

    def join_group(self, group_id: int, user_id: int) -> GroupMember:
        group = self.get_group(group_id)
        if group.is_private:
            raise ForbiddenError("This group is private; join with an invite token")
        return self._add_member(group, user_id)

    def _add_member(self, group: Group, user_id: int) -> GroupMember:
        group_id = group.id
        membership = GroupMember(group_id=group_id, user_id=user_id)
        self.db.add(membership)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("You are already a member of this group")
        self.db.refresh(membership)

        logger.info(f"User {user_id} joined group {group_id}")
        return membership

    def get_joined_groups(self, user_id: int) -> List[Group]:
        return self.db.query(Group).join(GroupMember).filter(
            GroupMember.user_id == user_id
        ).order_by(Group.name).all()

    def get_available_groups(self, user_id: int) -> List[Group]:
        """Public groups the user has not joined"""
        joined = select(GroupMember.group_id).where(GroupMember.user_id == user_id)
        return self.db.query(Group).filter(
            Group.is_private.is_(False),
            Group.id.notin_(joined)
        ).order_by(Group.name).all()

    def leave_group(self, group_id: int, user_id: int):
        membership = self.db.query(GroupMember).filter(
            GroupMember.group_id == group_id,
            GroupMember.user_id == user_id
        ).first()
        if not membership:
            raise NotFoundError("Not a member of that group")

        self.db.delete(membership)
        self.db.commit()

        logger.info(f"User {user_id} left group {group_id}")

    # =========================
    # INVITES
    # =========================
    def get_invite_token(self, group_id: int, user_id: int) -> str:
        """Owner only; the token is created on first request and then reused"""
        group = self.db.query(Group).filter(Group.id == group_id, Group.created_by == user_id).first()
        if not group:
            raise NotFoundError("Group not found or you're not the owner")

        if not group.invite_token:
            group.invite_token = secrets.token_urlsafe(24)
            self.db.commit()
            logger.info(f"Invite token issued for group {group.id}")
        return group.invite_token

    def find_by_invite_token(self, token: str) -> Group:
        group = self.db.query(Group).filter(Group.invite_token == token).first()
        if not group:
            raise NotFoundError("Group not found")
        return group

    def join_by_invite_token(self, user_id: int, payload: dict) -> Group:
        """Invite tokens also open private groups"""
        data = parse_payload(InviteTokenJoin, payload)
        group = self.find_by_invite_token(data.invite_token)
        self._add_member(group, user_id)
        return group
