"""
Facility review endpoints
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from carelink.core.database import get_db
from carelink.core.dependencies import get_current_user
from carelink.models.user import User
from carelink.schemas.common import payload_of, serialize, success
from carelink.schemas.community import ReviewCreate, ReviewReportCreate, ReviewResponse, ReviewUpdate
from carelink.services.review_service import ReviewService

router = APIRouter()


@router.get("/facility/{facility_id}")
async def list_facility_reviews(
        facility_id: int,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    return success(ReviewService(db).get_facility_reviews(facility_id, current_user.id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_review(
        review_data: ReviewCreate,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    """
    Review a facility; a user can review each facility once
    """
    review = ReviewService(db).create_review(current_user.id, payload_of(review_data))
    return success(serialize(ReviewResponse, review), "Review submitted successfully")


@router.post("/report", status_code=status.HTTP_201_CREATED)
async def report_review(
        report_data: ReviewReportCreate,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    report = ReviewService(db).report_review(current_user.id, payload_of(report_data))
    return success({"reportId": report.id, "reviewId": report.review_id}, "Review reported successfully")


@router.put("/{review_id}")
async def update_review(
        review_id: int,
        review_update: ReviewUpdate,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    review = ReviewService(db).update_review(review_id, current_user.id, payload_of(review_update))
    return success(serialize(ReviewResponse, review), "Review updated successfully")


@router.delete("/{review_id}")
async def delete_review(
        review_id: int,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    ReviewService(db).delete_review(review_id, current_user.id)
    return success(message="Review deleted successfully")
