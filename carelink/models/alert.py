"""
Alert history model
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey
from sqlalchemy.sql import func

from carelink.core.database import Base


class AlertHistory(Base):
    """An alert produced by the analytics, with whether contacts were notified"""
    __tablename__ = "alert_history"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    alert_type = Column(String(50), nullable=False)
    severity = Column(String(20), nullable=False)
    message = Column(Text, nullable=False)
    recommendation = Column(Text, nullable=True)
    notified = Column(Boolean, default=False, nullable=False)
    triggered_at = Column(DateTime, server_default=func.now())
