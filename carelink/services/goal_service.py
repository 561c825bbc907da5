"""
Daily goal service
"""
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime
import logging

from carelink.core.exceptions import ForbiddenError, NotFoundError
from carelink.models.goal import Goal, GoalLog
from carelink.schemas.goal import GoalCreate, GoalIds
from carelink.validation.common import parse_payload

logger = logging.getLogger(__name__)


class GoalService:
    """
    Goals recur daily: completing one stamps ``last_completed_at``, and
    the stamp is cleared again once the day it was set on has passed.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_goals(self, user_id: int) -> List[Goal]:
        return self.db.query(Goal).filter(Goal.user_id == user_id).order_by(Goal.created_at, Goal.id).all()

    def get_incomplete_goals(self, user_id: int) -> List[Goal]:
        return self.db.query(Goal).filter(
            Goal.user_id == user_id,
            Goal.last_completed_at.is_(None)
        ).order_by(Goal.created_at, Goal.id).all()

    def get_goal(self, goal_id: int, user_id: int) -> Goal:
        goal = self.db.query(Goal).filter(Goal.id == goal_id).first()
        if not goal:
            raise NotFoundError("Goal not found")
        if goal.user_id != user_id:
            raise ForbiddenError("You are not authorized to access this goal")
        return goal

    def create_goal(self, user_id: int, payload: dict) -> Goal:
        data = parse_payload(GoalCreate, payload)

        goal = Goal(user_id=user_id, name=data.name, description=data.description)
        self.db.add(goal)
        self.db.commit()
        self.db.refresh(goal)

        logger.info(f"Goal created: {goal.name} (ID: {goal.id}, user: {user_id})")
        return goal

    def delete_goal(self, goal_id: int, user_id: int):
        goal = self.get_goal(goal_id, user_id)
        self.db.delete(goal)
        self.db.commit()

        logger.info(f"Goal deleted: ID {goal_id}")

    def _owned_goals(self, user_id: int, payload: dict) -> List[Goal]:
        data = parse_payload(GoalIds, payload)
        return [self.get_goal(goal_id, user_id) for goal_id in dict.fromkeys(data.goal_ids)]

    def complete_goals(self, user_id: int, payload: dict, now: Optional[datetime] = None) -> List[Goal]:
        """Mark the listed goals completed for today"""
        now = now or datetime.utcnow()
        goals = self._owned_goals(user_id, payload)
        for goal in goals:
            goal.last_completed_at = now
        self.db.commit()
        for goal in goals:
            self.db.refresh(goal)

        logger.info(f"Goals completed by user {user_id}: {[g.id for g in goals]}")
        return goals

    def log_completions(self, user_id: int, payload: dict, now: Optional[datetime] = None) -> List[GoalLog]:
        """Add a completion record per goal; these feed the exercise stats"""
        now = now or datetime.utcnow()
        logs = [
            GoalLog(user_id=user_id, goal_id=goal.id, completed_at=now)
            for goal in self._owned_goals(user_id, payload)
        ]
        self.db.add_all(logs)
        self.db.commit()

        logger.info(f"{len(logs)} goal completion(s) logged for user {user_id}")
        return logs

    def reset_goals(self, user_id: int, now: Optional[datetime] = None) -> List[Goal]:
        """Clear completions made before today; returns the goals that were reset"""
        now = now or datetime.utcnow()
        start_of_today = datetime.combine(now.date(), datetime.min.time())

        goals = self.db.query(Goal).filter(
            Goal.user_id == user_id,
            Goal.last_completed_at.isnot(None),
            Goal.last_completed_at < start_of_today
        ).all()
        for goal in goals:
            goal.last_completed_at = None
        self.db.commit()

        if goals:
            logger.info(f"Reset {len(goals)} goal(s) for user {user_id}")
        return goals
