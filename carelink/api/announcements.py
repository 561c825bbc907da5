"""
Group announcement and comment endpoints
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from carelink.core.database import get_db
from carelink.core.dependencies import get_current_user
from carelink.models.user import User
from carelink.schemas.common import payload_of, serialize, success
from carelink.schemas.community import (
    AnnouncementCreate,
    AnnouncementResponse,
    AnnouncementUpdate,
    CommentCreate,
    CommentResponse,
)
from carelink.services.announcement_service import AnnouncementService

router = APIRouter()


@router.get("")
async def list_announcements(
        group_id: int = Query(..., alias="groupId"),
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    return success(AnnouncementService(db).get_announcements(group_id, current_user.id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_announcement(
        announcement_data: AnnouncementCreate,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    """
    Post an announcement (group owner only)
    """
    announcement = AnnouncementService(db).create_announcement(current_user.id, payload_of(announcement_data))
    return success(serialize(AnnouncementResponse, announcement), "Announcement posted successfully")


@router.post("/comments", status_code=status.HTTP_201_CREATED)
async def post_comment(
        comment_data: CommentCreate,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    """
    Comment on an announcement (group members only)
    """
    comment = AnnouncementService(db).post_comment(current_user.id, payload_of(comment_data))
    return success(serialize(CommentResponse, comment), "Comment posted successfully")


@router.delete("/comments/{comment_id}")
async def delete_comment(
        comment_id: int,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    AnnouncementService(db).delete_comment(comment_id, current_user.id)
    return success(message="Comment deleted successfully")


@router.get("/{announcement_id}/comments")
async def list_comments(
        announcement_id: int,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    return success(AnnouncementService(db).get_comments(announcement_id, current_user.id))


@router.put("/{announcement_id}")
async def update_announcement(
        announcement_id: int,
        announcement_update: AnnouncementUpdate,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    announcement = AnnouncementService(db).update_announcement(
        announcement_id, current_user.id, payload_of(announcement_update)
    )
    return success(serialize(AnnouncementResponse, announcement), "Announcement updated successfully")


@router.delete("/{announcement_id}")
async def delete_announcement(
        announcement_id: int,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    AnnouncementService(db).delete_announcement(announcement_id, current_user.id)
    return success(message="Announcement deleted successfully")
