"""
Group, announcement, comment and review schemas
"""
from datetime import datetime
from typing import Annotated, Optional

from pydantic import AnyUrl, Field, PositiveInt, TypeAdapter, WrapValidator, field_validator
from pydantic import ValidationError as PydanticValidationError

from carelink.schemas.common import CamelModel

_url_adapter = TypeAdapter(AnyUrl)


def _rating_message(value, handler):
    try:
        return handler(value)
    except PydanticValidationError:
        raise ValueError("Rating must be an integer between 1 and 5")


Rating = Annotated[int, Field(ge=1, le=5, strict=True), WrapValidator(_rating_message)]


class ImageUrlMixin(CamelModel):
    image_url: Optional[str] = None

    @field_validator("image_url")
    @classmethod
    def validate_image_url(cls, v):
        """Empty means no image; anything else must be an absolute URI"""
        if not v:
            return None
        try:
            _url_adapter.validate_python(v)
        except PydanticValidationError:
            raise ValueError("Image URL must be a valid URI")
        return v


class GroupCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=50, description="Group name")
    description: Optional[str] = Field(None, max_length=200)
    is_private: bool = False


class GroupResponse(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    is_private: bool
    created_by: int
    created_at: Optional[datetime] = None


class AnnouncementCreate(ImageUrlMixin):
    group_id: PositiveInt
    title: str = Field(..., min_length=1, max_length=100)
    content: str = Field(..., min_length=1, max_length=2000)


class AnnouncementUpdate(ImageUrlMixin):
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    content: Optional[str] = Field(None, min_length=1, max_length=2000)


class AnnouncementResponse(CamelModel):
    id: int
    group_id: int
    title: str
    content: str
    image_url: Optional[str] = None
    created_by: int
    created_at: Optional[datetime] = None


class CommentCreate(CamelModel):
    announcement_id: PositiveInt
    content: str = Field(..., min_length=1, max_length=1000)


class CommentResponse(CamelModel):
    id: int
    announcement_id: int
    user_id: int
    content: str
    created_at: Optional[datetime] = None


class ReviewCreate(CamelModel):
    facility_id: PositiveInt
    rating: Rating
    comment: Optional[str] = Field(None, max_length=500)


class ReviewUpdate(CamelModel):
    rating: Optional[Rating] = None
    comment: Optional[str] = Field(None, max_length=500)


class ReviewReportCreate(CamelModel):
    review_id: PositiveInt
    reason: str = Field(..., min_length=1, max_length=500)


class ReviewResponse(CamelModel):
    id: int
    facility_id: int
    user_id: int
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
    last_modified: Optional[datetime] = None


class InviteTokenJoin(CamelModel):
    invite_token: str = Field(..., min_length=1, max_length=64)
