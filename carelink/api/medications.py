"""
Medication endpoints
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from carelink.analytics.compliance import compute_compliance
from carelink.core.database import get_db
from carelink.core.dependencies import get_current_user
from carelink.models.user import User
from carelink.schemas.common import payload_of, serialize, success
from carelink.schemas.medication import (
    MedicationCreate,
    MedicationLogResponse,
    MedicationResponse,
    MedicationUpdate,
)
from carelink.services.medication_service import MedicationService

router = APIRouter()


@router.get("")
async def list_medications(
        include_inactive: bool = Query(False, alias="includeInactive"),
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    """
    List the user's medications with their compliance over every due dose
    """
    service = MedicationService(db)

    logs_by_medication = {}
    for log in service.get_due_logs(current_user.id):
        logs_by_medication.setdefault(log.medication_id, []).append(log)

    data = []
    for medication in service.get_medications(current_user.id, include_inactive=include_inactive):
        row = serialize(MedicationResponse, medication)
        row["complianceRate"] = compute_compliance(logs_by_medication.get(medication.id, []))["complianceRate"]
        data.append(row)

    return success(data)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_medication(
        medication_data: MedicationCreate,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    medication = MedicationService(db).create_medication(current_user.id, payload_of(medication_data))
    return success(serialize(MedicationResponse, medication), "Medication added successfully")


@router.get("/compliance")
async def get_compliance(
        period: str = Query("week", description="day, week or month"),
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    """
    Per-medication compliance for the requested period
    """
    data = MedicationService(db).get_compliance(current_user.id, period=period)
    return success(data)


@router.post("/logs/{log_id}/take")
async def mark_dose_taken(
        log_id: int,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    log = MedicationService(db).mark_taken(log_id, current_user.id)
    return success(serialize(MedicationLogResponse, log), "Dose marked as taken")


@router.get("/{medication_id}")
async def get_medication(
        medication_id: int,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    service = MedicationService(db)
    medication = service.get_medication(medication_id, current_user.id)

    data = serialize(MedicationResponse, medication)
    data["logs"] = [serialize(MedicationLogResponse, log) for log in service.get_logs(medication_id, current_user.id)]
    return success(data)


@router.put("/{medication_id}")
async def update_medication(
        medication_id: int,
        medication_update: MedicationUpdate,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    medication = MedicationService(db).update_medication(
        medication_id, current_user.id, payload_of(medication_update)
    )
    return success(serialize(MedicationResponse, medication), "Medication updated successfully")


@router.delete("/{medication_id}")
async def deactivate_medication(
        medication_id: int,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    """
    Deactivate a medication; its history is kept
    """
    MedicationService(db).deactivate_medication(medication_id, current_user.id)
    return success(message="Medication deactivated successfully")
