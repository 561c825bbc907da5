"""
Medication payload validation
"""
from typing import List

from carelink.schemas.medication import MedicationCreate, MedicationUpdate
from carelink.validation.common import collect_errors


def validate_medication(payload: dict, partial: bool = False) -> List[str]:
    return collect_errors(MedicationUpdate if partial else MedicationCreate, payload)
