"""
Medication and medication log models
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, Date, Boolean, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from carelink.core.database import Base


class Medication(Base):
    """A medication prescribed to a user; deactivated rather than deleted"""
    __tablename__ = "medications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    name = Column(String(255), nullable=False, index=True)
    dosage = Column(String(100), nullable=False)
    frequency = Column(String(50), nullable=False)
    timing = Column(String(5), nullable=True)  # HH:MM
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    instructions = Column(Text, nullable=True)
    prescribed_by = Column(String(255), nullable=True)
    category = Column(String(100), nullable=True)

    active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    user = relationship("User", back_populates="medications")
    logs = relationship("MedicationLog", back_populates="medication", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Medication(id={self.id}, name='{self.name}', dosage='{self.dosage}')>"


class MedicationLog(Base):
    """One scheduled dose; marked taken at most once"""
    __tablename__ = "medication_logs"

    id = Column(Integer, primary_key=True, index=True)
    medication_id = Column(Integer, ForeignKey("medications.id"), nullable=False, index=True)
    scheduled_time = Column(DateTime, nullable=False, index=True)
    taken = Column(Boolean, default=False, nullable=False)
    taken_at = Column(DateTime, nullable=True)

    medication = relationship("Medication", back_populates="logs")

    def __repr__(self):
        return f"<MedicationLog(id={self.id}, medication_id={self.medication_id}, taken={self.taken})>"
