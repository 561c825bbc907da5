"""
Exercise catalogue, preference and progress service
"""
from sqlalchemy import func
from sqlalchemy.orm import Session
from typing import Dict, List, Optional
from datetime import datetime
import logging

from carelink.core.exceptions import ConflictError, NotFoundError
from carelink.models.exercise import Exercise, ExerciseCategory, ExerciseLog, ExercisePreference, ExerciseStep
from carelink.models.goal import GoalLog
from carelink.schemas.exercise import ExercisePreferences
from carelink.validation.common import parse_payload

logger = logging.getLogger(__name__)


class ExerciseService:
    def __init__(self, db: Session):
        self.db = db

    def get_categories(self) -> List[ExerciseCategory]:
        return self.db.query(ExerciseCategory).order_by(ExerciseCategory.name).all()

    def get_exercise(self, exercise_id: int) -> Exercise:
        exercise = self.db.query(Exercise).filter(Exercise.id == exercise_id).first()
        if not exercise:
            raise NotFoundError("Exercise not found")
        return exercise

    def get_exercises(self, user_id: int) -> List[Exercise]:
        """Exercises in the user's preferred categories, or every exercise when none are set"""
        query = self.db.query(Exercise)
        preferred = self.get_preferences(user_id)
        if preferred:
            query = query.filter(Exercise.category_id.in_(preferred))
        return query.order_by(Exercise.title, Exercise.id).all()

    def get_steps(self, exercise_id: int) -> List[ExerciseStep]:
        return self.get_exercise(exercise_id).steps

    # =========================
    # PREFERENCES
    # =========================
    def get_preferences(self, user_id: int) -> List[int]:
        rows = self.db.query(ExercisePreference.category_id).filter(
            ExercisePreference.user_id == user_id
        ).order_by(ExercisePreference.category_id).all()
        return [row.category_id for row in rows]

    def _category_ids(self, payload: dict) -> List[int]:
        data = parse_payload(ExercisePreferences, payload)
        category_ids = list(dict.fromkeys(data.category_ids))

        known = self.db.query(ExerciseCategory.id).filter(ExerciseCategory.id.in_(category_ids)).count()
        if known != len(category_ids):
            raise NotFoundError("Exercise category not found")
        return category_ids

    def _replace_preferences(self, user_id: int, category_ids: List[int]):
        self.db.query(ExercisePreference).filter(
            ExercisePreference.user_id == user_id
        ).delete(synchronize_session=False)
        self.db.add_all(ExercisePreference(user_id=user_id, category_id=c) for c in category_ids)
        self.db.commit()

    def save_preferences(self, user_id: int, payload: dict) -> List[int]:
        """First-time personalisation; later changes go through ``update_preferences``"""
        category_ids = self._category_ids(payload)
        if self.get_preferences(user_id):
            raise ConflictError("Exercise preferences already set")

        self._replace_preferences(user_id, category_ids)
        logger.info(f"Exercise preferences saved for user {user_id}: {category_ids}")
        return category_ids

    def update_preferences(self, user_id: int, payload: dict) -> List[int]:
        category_ids = self._category_ids(payload)
        self._replace_preferences(user_id, category_ids)

        logger.info(f"Exercise preferences updated for user {user_id}: {category_ids}")
        return category_ids

    def delete_preferences(self, user_id: int):
        self.db.query(ExercisePreference).filter(
            ExercisePreference.user_id == user_id
        ).delete(synchronize_session=False)
        self.db.commit()

        logger.info(f"Exercise preferences cleared for user {user_id}")

    # =========================
    # PROGRESS
    # =========================
    def log_completion(self, user_id: int, exercise_id: int, now: Optional[datetime] = None) -> ExerciseLog:
        exercise = self.get_exercise(exercise_id)
        log = ExerciseLog(user_id=user_id, exercise_id=exercise.id, completed_at=now or datetime.utcnow())
        self.db.add(log)
        self.db.commit()
        self.db.refresh(log)

        logger.info(f"Exercise {exercise.id} completed by user {user_id}")
        return log

    def get_stats(self, user_id: int) -> Dict:
        exercises = self.db.query(func.count(ExerciseLog.id)).filter(ExerciseLog.user_id == user_id).scalar()
        goals = self.db.query(func.count(GoalLog.id)).filter(GoalLog.user_id == user_id).scalar()
        return {
            "userId": user_id,
            "exerciseCompleted": exercises or 0,
            "goalCompleted": goals or 0,
        }
