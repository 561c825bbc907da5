"""
Facility review service
"""
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import Dict
import logging

from carelink.core.exceptions import ConflictError, ForbiddenError, NotFoundError
from carelink.models.facility import Facility, Review, ReviewReport
from carelink.schemas.community import ReviewCreate, ReviewReportCreate, ReviewUpdate
from carelink.validation.common import parse_payload

logger = logging.getLogger(__name__)


class ReviewService:
    """One review per user and facility; deleted reviews are deactivated"""

    def __init__(self, db: Session):
        self.db = db

    def get_facility(self, facility_id: int) -> Facility:
        facility = self.db.query(Facility).filter(Facility.id == facility_id).first()
        if not facility:
            raise NotFoundError("Facility not found")
        return facility

    def get_review(self, review_id: int) -> Review:
        review = self.db.query(Review).filter(
            Review.id == review_id,
            Review.is_active.is_(True)
        ).first()
        if not review:
            raise NotFoundError("Review not found")
        return review

    def get_facility_reviews(self, facility_id: int, user_id: int) -> Dict:
        facility = self.get_facility(facility_id)
        reviews = self.db.query(Review).filter(
            Review.facility_id == facility_id,
            Review.is_active.is_(True)
        ).order_by(Review.created_at.desc(), Review.id.desc()).all()

        ratings = [r.rating for r in reviews]
        return {
            "facilityId": facility.id,
            "facilityName": facility.name,
            "averageRating": round(sum(ratings) / len(ratings), 1) if ratings else None,
            "totalReviews": len(reviews),
            "reviews": [
                {
                    "id": r.id,
                    "userId": r.user_id,
                    "userName": r.author.name if r.author else None,
                    "rating": r.rating,
                    "comment": r.comment,
                    "createdAt": r.created_at.isoformat() if r.created_at else None,
                    "lastModified": r.last_modified.isoformat() if r.last_modified else None,
                    "isOwnReview": r.user_id == user_id,
                }
                for r in reviews
            ],
        }

    def create_review(self, user_id: int, payload: dict) -> Review:
        data = parse_payload(ReviewCreate, payload)

        facility = self.get_facility(data.facility_id)

        # A previously deleted review is brought back instead of inserting a second row
        review = self.db.query(Review).filter(
            Review.user_id == user_id,
            Review.facility_id == facility.id,
            Review.is_active.is_(False)
        ).first()
        if review:
            review.is_active = True
            review.rating = data.rating
            review.comment = data.comment
        else:
            review = Review(
                facility_id=facility.id,
                user_id=user_id,
                rating=data.rating,
                comment=data.comment,
            )
            self.db.add(review)

        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("You have already reviewed this facility")
        self.db.refresh(review)

        logger.info(f"Review saved: facility {facility.id} by user {user_id} (ID: {review.id})")
        return review

    def _owned_review(self, review_id: int, user_id: int) -> Review:
        review = self.get_review(review_id)
        if review.user_id != user_id:
            raise ForbiddenError("You are not authorized to modify this review")
        return review

    def update_review(self, review_id: int, user_id: int, payload: dict) -> Review:
        changes = parse_payload(ReviewUpdate, payload)

        review = self._owned_review(review_id, user_id)
        if changes.rating is not None:
            review.rating = changes.rating
        if "comment" in changes.model_fields_set:
            review.comment = changes.comment

        self.db.commit()
        self.db.refresh(review)

        logger.info(f"Review updated: ID {review.id}")
        return review

    def delete_review(self, review_id: int, user_id: int):
        review = self._owned_review(review_id, user_id)
        review.is_active = False
        self.db.commit()

        logger.info(f"Review deactivated: ID {review_id}")

    def report_review(self, user_id: int, payload: dict) -> ReviewReport:
        data = parse_payload(ReviewReportCreate, payload)

        review = self.get_review(data.review_id)
        report = ReviewReport(review_id=review.id, user_id=user_id, reason=data.reason)
        self.db.add(report)
        self.db.commit()
        self.db.refresh(report)

        logger.info(f"Review {review.id} reported by user {user_id}")
        return report
