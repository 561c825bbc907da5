"""
Exercise catalogue, preference and completion log models
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from carelink.core.database import Base


class ExerciseCategory(Base):
    __tablename__ = "exercise_categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True)

    exercises = relationship("Exercise", back_populates="category")


class Exercise(Base):
    __tablename__ = "exercises"

    id = Column(Integer, primary_key=True, index=True)
    category_id = Column(Integer, ForeignKey("exercise_categories.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    duration_minutes = Column(Integer, nullable=True)
    image_url = Column(String(500), nullable=True)

    category = relationship("ExerciseCategory", back_populates="exercises")
    steps = relationship(
        "ExerciseStep",
        back_populates="exercise",
        order_by="ExerciseStep.step_number",
        cascade="all, delete-orphan",
    )


class ExerciseStep(Base):
    __tablename__ = "exercise_steps"
    __table_args__ = (UniqueConstraint("exercise_id", "step_number", name="uq_exercise_step"),)

    id = Column(Integer, primary_key=True, index=True)
    exercise_id = Column(Integer, ForeignKey("exercises.id"), nullable=False, index=True)
    step_number = Column(Integer, nullable=False)
    instruction = Column(Text, nullable=False)

    exercise = relationship("Exercise", back_populates="steps")


class ExercisePreference(Base):
    """A category the user wants exercises from"""
    __tablename__ = "exercise_preferences"
    __table_args__ = (UniqueConstraint("user_id", "category_id", name="uq_exercise_preference"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("exercise_categories.id"), nullable=False)


class ExerciseLog(Base):
    __tablename__ = "exercise_logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    exercise_id = Column(Integer, ForeignKey("exercises.id"), nullable=False, index=True)
    completed_at = Column(DateTime, nullable=False)
