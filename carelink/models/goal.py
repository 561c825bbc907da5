"""
Daily exercise goal and goal completion log models
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from carelink.core.database import Base


class Goal(Base):
    """A recurring goal; ``last_completed_at`` is cleared each new day"""
    __tablename__ = "goals"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(String(300), nullable=True)
    last_completed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    logs = relationship("GoalLog", back_populates="goal", cascade="all, delete-orphan")


class GoalLog(Base):
    __tablename__ = "goal_logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    goal_id = Column(Integer, ForeignKey("goals.id"), nullable=False, index=True)
    completed_at = Column(DateTime, nullable=False)

    goal = relationship("Goal", back_populates="logs")
