"""
Exercise schemas
"""
from typing import List, Optional

from pydantic import Field, PositiveInt

from carelink.schemas.common import CamelModel


class ExercisePreferences(CamelModel):
    category_ids: List[PositiveInt] = Field(..., min_length=1)


class ExerciseCategoryResponse(CamelModel):
    id: int
    name: str


class ExerciseResponse(CamelModel):
    id: int
    category_id: int
    title: str
    description: Optional[str] = None
    duration_minutes: Optional[int] = None
    image_url: Optional[str] = None


class ExerciseStepResponse(CamelModel):
    id: int
    step_number: int
    instruction: str
