"""
User model
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from carelink.core.database import Base


class User(Base):
    """Registered user (senior or caregiver)"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=False)
    hashed_password = Column(String(255), nullable=False)
    phone = Column(String(20), nullable=True)

    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, server_default=func.now())
    last_login = Column(DateTime, nullable=True)

    medications = relationship("Medication", back_populates="user")
    health_metrics = relationship("HealthMetric", back_populates="user")
    emergency_contacts = relationship("EmergencyContact", back_populates="user")

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"
