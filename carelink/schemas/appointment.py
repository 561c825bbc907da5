"""
Doctor and appointment schemas
"""
from datetime import datetime
from typing import Literal, Optional

from pydantic import Field, PositiveInt, ValidationInfo, field_validator, model_validator

from carelink.core.constants import APPOINTMENT_DEFAULT_DURATION, APPOINTMENT_STATUSES
from carelink.schemas.common import CamelModel
from carelink.validation.common import UtcDatetime, now_from


class AppointmentFields(CamelModel):
    appointment_date: Optional[UtcDatetime] = None
    duration_minutes: Optional[int] = Field(None, ge=15, le=240)
    reason: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = Field(None, max_length=1000)
    follow_up_needed: Optional[bool] = None

    @field_validator("appointment_date")
    @classmethod
    def in_the_future(cls, v, info: ValidationInfo):
        if v is not None and v <= now_from(info):
            raise ValueError("Appointment date must be in the future")
        return v


class AppointmentCreate(AppointmentFields):
    doctor_id: PositiveInt
    appointment_date: UtcDatetime
    duration_minutes: int = Field(APPOINTMENT_DEFAULT_DURATION, ge=15, le=240)
    follow_up_needed: bool = False


class AppointmentUpdate(AppointmentFields):
    status: Optional[Literal[APPOINTMENT_STATUSES]] = None

    @model_validator(mode="after")
    def not_empty(self):
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided for update")
        return self


class DoctorResponse(CamelModel):
    id: int
    name: str
    specialty: Optional[str] = None
    clinic: Optional[str] = None
    location: Optional[str] = None
    phone: Optional[str] = None


class AppointmentResponse(CamelModel):
    id: int
    doctor_id: int
    appointment_date: datetime
    duration_minutes: int
    reason: Optional[str] = None
    status: str
    notes: Optional[str] = None
    follow_up_needed: bool
    created_at: Optional[datetime] = None
