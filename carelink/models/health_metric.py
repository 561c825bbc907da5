"""
Health metric model
"""
from sqlalchemy import Column, Integer, String, Float, Text, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from carelink.core.database import Base


class HealthMetric(Base):
    """A single health reading; blood pressure keeps systolic in ``value``"""
    __tablename__ = "health_metrics"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    metric_type = Column(String(50), nullable=False, index=True)
    value = Column(Float, nullable=False)
    diastolic = Column(Float, nullable=True)
    unit = Column(String(20), nullable=True)
    notes = Column(Text, nullable=True)
    recorded_at = Column(DateTime, nullable=False, index=True)
    created_at = Column(DateTime, server_default=func.now())

    user = relationship("User", back_populates="health_metrics")

    @property
    def display_value(self):
        """Value as submitted: ``"120/80"`` for blood pressure, the number otherwise"""
        if self.metric_type == "blood_pressure" and self.diastolic is not None:
            return f"{self.value:g}/{self.diastolic:g}"
        return self.value

    def __repr__(self):
        return f"<HealthMetric(id={self.id}, type='{self.metric_type}', value={self.display_value})>"
