"""
Exercise endpoints
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from carelink.core.database import get_db
from carelink.core.dependencies import get_current_user
from carelink.models.user import User
from carelink.schemas.common import payload_of, serialize, success
from carelink.schemas.exercise import (
    ExerciseCategoryResponse,
    ExercisePreferences,
    ExerciseResponse,
    ExerciseStepResponse,
)
from carelink.services.exercise_service import ExerciseService

router = APIRouter()


@router.get("")
async def list_exercises(
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    """
    Exercises matching the user's preferred categories (all when none are set)
    """
    exercises = ExerciseService(db).get_exercises(current_user.id)
    return success([serialize(ExerciseResponse, e) for e in exercises])


@router.get("/categories")
async def list_categories(
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    categories = ExerciseService(db).get_categories()
    return success([serialize(ExerciseCategoryResponse, c) for c in categories])


@router.get("/preferences")
async def get_preferences(
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    return success({"categoryIds": ExerciseService(db).get_preferences(current_user.id)})


@router.post("/preferences", status_code=status.HTTP_201_CREATED)
async def save_preferences(
        preferences: ExercisePreferences,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    category_ids = ExerciseService(db).save_preferences(current_user.id, payload_of(preferences))
    return success({"categoryIds": category_ids}, "Preferences saved successfully")


@router.put("/preferences")
async def update_preferences(
        preferences: ExercisePreferences,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    category_ids = ExerciseService(db).update_preferences(current_user.id, payload_of(preferences))
    return success({"categoryIds": category_ids}, "Preferences updated successfully")


@router.delete("/preferences")
async def delete_preferences(
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    ExerciseService(db).delete_preferences(current_user.id)
    return success(message="Preference deleted successfully")


@router.get("/stats")
async def get_stats(
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    return success(ExerciseService(db).get_stats(current_user.id))


@router.get("/{exercise_id}/steps")
async def list_steps(
        exercise_id: int,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    steps = ExerciseService(db).get_steps(exercise_id)
    return success([serialize(ExerciseStepResponse, s) for s in steps])


@router.post("/{exercise_id}/complete", status_code=status.HTTP_201_CREATED)
async def log_exercise(
        exercise_id: int,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    log = ExerciseService(db).log_completion(current_user.id, exercise_id)
    return success({"logId": log.id, "exerciseId": exercise_id}, "Exercise logged")
