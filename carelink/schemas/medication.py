"""
Medication schemas
"""
import re
from datetime import date, datetime
from typing import Literal, Optional

from pydantic import Field, field_validator, model_validator

from carelink.core.constants import MEDICATION_FREQUENCIES
from carelink.schemas.common import CamelModel

Frequency = Literal[MEDICATION_FREQUENCIES]

TIMING_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")


class MedicationFields(CamelModel):
    """Constraints shared by create and update payloads"""
    name: Optional[str] = Field(None, min_length=1, max_length=255, description="Medication name")
    dosage: Optional[str] = Field(None, min_length=1, max_length=100, description="Dose, e.g. 5mg")
    frequency: Optional[Frequency] = None
    timing: Optional[str] = Field(None, description="Time of the first dose, HH:MM")
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    instructions: Optional[str] = None
    prescribed_by: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[str] = Field(None, max_length=100)

    @field_validator("timing")
    @classmethod
    def validate_timing(cls, v):
        if v is not None and not TIMING_PATTERN.match(v):
            raise ValueError("Timing must be in HH:MM format")
        return v

    @model_validator(mode="after")
    def end_after_start(self):
        if self.start_date and self.end_date and self.end_date <= self.start_date:
            raise ValueError("End date must be after start date")
        return self


class MedicationCreate(MedicationFields):
    name: str = Field(..., min_length=1, max_length=255, description="Medication name")
    dosage: str = Field(..., min_length=1, max_length=100, description="Dose, e.g. 5mg")
    frequency: Frequency
    prescribed_by: str = Field(..., min_length=1, max_length=255)


class MedicationUpdate(MedicationFields):
    @model_validator(mode="after")
    def not_empty(self):
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided for update")
        return self


class MedicationResponse(CamelModel):
    id: int
    name: str
    dosage: str
    frequency: str
    timing: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    instructions: Optional[str] = None
    prescribed_by: Optional[str] = None
    category: Optional[str] = None
    active: bool
    created_at: Optional[datetime] = None


class MedicationLogResponse(CamelModel):
    id: int
    medication_id: int
    scheduled_time: datetime
    taken: bool
    taken_at: Optional[datetime] = None
