"""
Facility, review and review report models
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from carelink.core.database import Base


class Facility(Base):
    """A care facility or community centre that can be reviewed"""
    __tablename__ = "facilities"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    address = Column(String(500), nullable=True)
    facility_type = Column(String(100), nullable=True)

    reviews = relationship("Review", back_populates="facility")


class Review(Base):
    """One review per user and facility; deletion only deactivates it"""
    __tablename__ = "reviews"
    __table_args__ = (UniqueConstraint("user_id", "facility_id", name="uq_review_user_facility"),)

    id = Column(Integer, primary_key=True, index=True)
    facility_id = Column(Integer, ForeignKey("facilities.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    rating = Column(Integer, nullable=False)
    comment = Column(String(500), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    last_modified = Column(DateTime, onupdate=func.now())

    facility = relationship("Facility", back_populates="reviews")
    author = relationship("User")


class ReviewReport(Base):
    __tablename__ = "review_reports"

    id = Column(Integer, primary_key=True, index=True)
    review_id = Column(Integer, ForeignKey("reviews.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    reason = Column(String(500), nullable=False)
    created_at = Column(DateTime, server_default=func.now())
