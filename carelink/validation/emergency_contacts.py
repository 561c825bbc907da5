"""
Emergency contact payload validation
"""
from typing import List

from carelink.schemas.emergency_contact import EmergencyContactCreate
from carelink.validation.common import collect_errors


def validate_emergency_contact(payload: dict) -> List[str]:
    return collect_errors(EmergencyContactCreate, payload)
