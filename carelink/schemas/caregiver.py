"""
Caregiver relationship and note schemas
"""
from datetime import datetime
from typing import Literal, Optional

from pydantic import EmailStr, Field

from carelink.core.constants import CAREGIVER_ACCESS_LEVELS, CAREGIVER_NOTE_MAX_LENGTH, CAREGIVER_RELATIONSHIPS
from carelink.schemas.common import CamelModel


class CaregiverRelationshipCreate(CamelModel):
    patient_email: EmailStr
    relationship: Literal[CAREGIVER_RELATIONSHIPS]
    access_level: Literal[CAREGIVER_ACCESS_LEVELS] = "monitoring"


class CaregiverNoteCreate(CamelModel):
    note: str = Field(..., min_length=1, max_length=CAREGIVER_NOTE_MAX_LENGTH)


class CaregiverRelationshipResponse(CamelModel):
    id: int
    caregiver_id: int
    patient_id: int
    relationship: str = Field(validation_alias="relationship_type")
    access_level: str
    created_at: Optional[datetime] = None


class CaregiverNoteResponse(CamelModel):
    id: int
    patient_id: int
    note: str
    created_at: datetime
