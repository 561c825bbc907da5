"""
Announcement, comment, group and review payload validation
"""
from typing import List

from carelink.schemas.community import (
    AnnouncementCreate,
    AnnouncementUpdate,
    CommentCreate,
    GroupCreate,
    ReviewCreate,
    ReviewReportCreate,
    ReviewUpdate,
)
from carelink.validation.common import collect_errors


def validate_announcement(payload: dict, partial: bool = False) -> List[str]:
    return collect_errors(AnnouncementUpdate if partial else AnnouncementCreate, payload)


def validate_comment(payload: dict) -> List[str]:
    return collect_errors(CommentCreate, payload)


def validate_group(payload: dict) -> List[str]:
    return collect_errors(GroupCreate, payload)


def validate_review(payload: dict, partial: bool = False) -> List[str]:
    return collect_errors(ReviewUpdate if partial else ReviewCreate, payload)


def validate_review_report(payload: dict) -> List[str]:
    return collect_errors(ReviewReportCreate, payload)
