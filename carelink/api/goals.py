"""
Daily goal endpoints
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from carelink.core.database import get_db
from carelink.core.dependencies import get_current_user
from carelink.models.user import User
from carelink.schemas.common import payload_of, serialize, success
from carelink.schemas.goal import GoalCreate, GoalIds, GoalResponse
from carelink.services.goal_service import GoalService

router = APIRouter()


@router.get("")
async def list_goals(
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    goals = GoalService(db).get_goals(current_user.id)
    return success([serialize(GoalResponse, g) for g in goals])


@router.get("/incomplete")
async def list_incomplete_goals(
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    goals = GoalService(db).get_incomplete_goals(current_user.id)
    return success([serialize(GoalResponse, g) for g in goals])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_goal(
        goal_data: GoalCreate,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    goal = GoalService(db).create_goal(current_user.id, payload_of(goal_data))
    return success(serialize(GoalResponse, goal), "Goal created successfully")


@router.put("/complete")
async def complete_goals(
        goal_ids: GoalIds,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    goals = GoalService(db).complete_goals(current_user.id, payload_of(goal_ids))
    return success([serialize(GoalResponse, g) for g in goals], "Goals marked as completed")


@router.post("/logs", status_code=status.HTTP_201_CREATED)
async def log_goal_completions(
        goal_ids: GoalIds,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    logs = GoalService(db).log_completions(current_user.id, payload_of(goal_ids))
    return success({"logged": len(logs)}, "Goal logged")


@router.put("/reset")
async def reset_goals(
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    """
    Clear completions made on earlier days
    """
    goals = GoalService(db).reset_goals(current_user.id)
    return success({"resetGoalIds": [g.id for g in goals]})


@router.delete("/{goal_id}")
async def delete_goal(
        goal_id: int,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    GoalService(db).delete_goal(goal_id, current_user.id)
    return success(message="Goal deleted successfully")
