"""
Emergency contact and alert schemas
"""
import re
from datetime import datetime
from typing import Literal, Optional

from pydantic import EmailStr, Field, field_validator

from carelink.core.constants import CONTACT_RELATIONSHIPS
from carelink.schemas.common import CamelModel

Relationship = Literal[CONTACT_RELATIONSHIPS]

# Singapore mobile/landline numbers, optional +65 prefix
PHONE_PATTERN = re.compile(r"^(\+65)?[689]\d{7}$")


class EmergencyContactCreate(CamelModel):
    name: str = Field(..., min_length=2, max_length=100, description="Contact name")
    relationship: Relationship
    phone: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None
    is_primary: bool = False
    alert_on_missed_meds: bool = True

    @field_validator("phone")
    @classmethod
    def singapore_number(cls, v):
        v = v.replace(" ", "")
        if not PHONE_PATTERN.match(v):
            raise ValueError("Please enter a valid Singapore phone number")
        return v

    @field_validator("email", mode="before")
    @classmethod
    def blank_email(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class EmergencyContactResponse(CamelModel):
    id: int
    name: str
    relationship: str = Field(validation_alias="relationship_type")
    phone: str
    email: Optional[str] = None
    is_primary: bool
    alert_on_missed_meds: bool


class AlertResponse(CamelModel):
    id: int
    alert_type: str
    severity: str
    message: str
    recommendation: Optional[str] = None
    notified: bool
    triggered_at: Optional[datetime] = None
