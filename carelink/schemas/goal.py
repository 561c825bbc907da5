"""
Goal schemas
"""
from datetime import datetime
from typing import List, Optional

from pydantic import Field, PositiveInt

from carelink.schemas.common import CamelModel


class GoalCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100, description="Goal name")
    description: Optional[str] = Field(None, max_length=300)


class GoalIds(CamelModel):
    """Goals to mark completed or to log"""
    goal_ids: List[PositiveInt] = Field(..., min_length=1)


class GoalResponse(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    last_completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
