"""
Caregiver relationship and caregiver note models
"""
from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from carelink.core.database import Base


class CaregiverRelationship(Base):
    """Grants a caregiver read access to a patient's medication and health data"""
    __tablename__ = "caregiver_relationships"
    __table_args__ = (UniqueConstraint("caregiver_id", "patient_id", name="uq_caregiver_patient"),)

    id = Column(Integer, primary_key=True, index=True)
    caregiver_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    patient_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    relationship_type = Column(String(50), nullable=False)
    access_level = Column(String(20), default="monitoring", nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    patient = relationship("User", foreign_keys=[patient_id])


class CaregiverNote(Base):
    __tablename__ = "caregiver_notes"

    id = Column(Integer, primary_key=True, index=True)
    caregiver_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    patient_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    note = Column(String(1000), nullable=False)
    created_at = Column(DateTime, nullable=False)
