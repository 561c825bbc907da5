"""
Group announcement and comment service
"""
from sqlalchemy.orm import Session
from typing import Dict, List
import logging

from carelink.core.exceptions import (
    ForbiddenError,
    NotFoundError,
    NotMemberError,
)
from carelink.models.group import Announcement, Comment
from carelink.services.group_service import GroupService
from carelink.schemas.community import AnnouncementCreate, AnnouncementUpdate, CommentCreate
from carelink.validation.common import parse_payload

logger = logging.getLogger(__name__)


class AnnouncementService:
    """Announcements are posted by the group owner; members may comment"""

    def __init__(self, db: Session):
        self.db = db
        self.groups = GroupService(db)

    def get_announcement(self, announcement_id: int) -> Announcement:
        announcement = self.db.query(Announcement).filter(Announcement.id == announcement_id).first()
        if not announcement:
            raise NotFoundError("Announcement not found")
        return announcement

    def _require_access(self, group, user_id: int):
        if group.is_private and not self.groups.is_member(group.id, user_id):
            raise NotMemberError("Must be a member to view this group")

    def get_announcements(self, group_id: int, user_id: int) -> List[Dict]:
        group = self.groups.get_group(group_id)
        self._require_access(group, user_id)

        announcements = self.db.query(Announcement).filter(
            Announcement.group_id == group_id
        ).order_by(Announcement.created_at.desc(), Announcement.id.desc()).all()

        return [
            {
                "id": a.id,
                "groupId": a.group_id,
                "title": a.title,
                "content": a.content,
                "imageUrl": a.image_url,
                "createdBy": a.created_by,
                "authorName": a.author.name if a.author else None,
                "createdAt": a.created_at.isoformat() if a.created_at else None,
                "commentCount": len(a.comments),
            }
            for a in announcements
        ]

    def create_announcement(self, user_id: int, payload: dict) -> Announcement:
        data = parse_payload(AnnouncementCreate, payload)

        group = self.groups.get_group(data.group_id)
        if group.created_by != user_id:
            raise ForbiddenError("Only the group owner can post announcements")

        announcement = Announcement(
            group_id=group.id,
            title=data.title,
            content=data.content,
            image_url=data.image_url,
            created_by=user_id,
        )
        self.db.add(announcement)
        self.db.commit()
        self.db.refresh(announcement)

        logger.info(f"Announcement posted: {announcement.title} (ID: {announcement.id}, group: {group.id})")
        return announcement

    def update_announcement(self, announcement_id: int, user_id: int, payload: dict) -> Announcement:
        changes = parse_payload(AnnouncementUpdate, payload)

        announcement = self.get_announcement(announcement_id)
        if announcement.group.created_by != user_id:
            raise ForbiddenError("Only the group owner can edit this announcement")

        if changes.title is not None:
            announcement.title = changes.title
        if changes.content is not None:
            announcement.content = changes.content
        if "image_url" in changes.model_fields_set:
            announcement.image_url = changes.image_url

        self.db.commit()
        self.db.refresh(announcement)

        logger.info(f"Announcement updated: ID {announcement.id}")
        return announcement

    def delete_announcement(self, announcement_id: int, user_id: int):
        """Group owner or author only; comments go with it"""
        announcement = self.get_announcement(announcement_id)
        if user_id not in (announcement.group.created_by, announcement.created_by):
            raise ForbiddenError("You are not authorized to delete this announcement")

        self.db.delete(announcement)
        self.db.commit()

        logger.info(f"Announcement deleted: ID {announcement_id}")

    # =========================
    # COMMENTS
    # =========================
    def get_comments(self, announcement_id: int, user_id: int) -> List[Dict]:
        announcement = self.get_announcement(announcement_id)
        self._require_access(announcement.group, user_id)

        comments = self.db.query(Comment).filter(
            Comment.announcement_id == announcement_id
        ).order_by(Comment.created_at, Comment.id).all()

        return [
            {
                "id": c.id,
                "announcementId": c.announcement_id,
                "userId": c.user_id,
                "userName": c.author.name if c.author else None,
                "content": c.content,
                "createdAt": c.created_at.isoformat() if c.created_at else None,
                "isOwnComment": c.user_id == user_id,
            }
            for c in comments
        ]

    def post_comment(self, user_id: int, payload: dict) -> Comment:
        data = parse_payload(CommentCreate, payload)

        announcement = self.get_announcement(data.announcement_id)
        if not self.groups.is_member(announcement.group_id, user_id):
            raise NotMemberError("Must be a member to comment")

        comment = Comment(
            announcement_id=announcement.id,
            user_id=user_id,
            content=data.content,
        )
        self.db.add(comment)
        self.db.commit()
        self.db.refresh(comment)

        logger.info(f"Comment posted on announcement {announcement.id} by user {user_id}")
        return comment

    def delete_comment(self, comment_id: int, user_id: int):
        comment = self.db.query(Comment).filter(Comment.id == comment_id).first()
        if not comment:
            raise NotFoundError("Comment not found")
        if comment.user_id != user_id:
            raise ForbiddenError("You are not authorized to delete this comment")

        self.db.delete(comment)
        self.db.commit()

        logger.info(f"Comment deleted: ID {comment_id}")
