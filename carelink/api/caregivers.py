"""
Caregiver monitoring endpoints
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from carelink.core.database import get_db
from carelink.core.dependencies import get_current_user
from carelink.models.user import User
from carelink.schemas.caregiver import (
    CaregiverNoteCreate,
    CaregiverNoteResponse,
    CaregiverRelationshipCreate,
    CaregiverRelationshipResponse,
)
from carelink.schemas.common import payload_of, serialize, success
from carelink.services.caregiver_service import CaregiverService

router = APIRouter()


@router.post("/relationships", status_code=status.HTTP_201_CREATED)
async def create_relationship(
        relationship_data: CaregiverRelationshipCreate,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    """
    Link the current user as caregiver of the patient with the given email
    """
    link = CaregiverService(db).create_relationship(current_user.id, payload_of(relationship_data))
    return success(serialize(CaregiverRelationshipResponse, link), "Caregiver relationship created successfully")


@router.delete("/relationships/{relationship_id}")
async def remove_relationship(
        relationship_id: int,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    CaregiverService(db).remove_relationship(relationship_id, current_user.id)
    return success(message="Caregiver relationship removed successfully")


@router.get("/patients")
async def list_patients(
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    return success(CaregiverService(db).get_patients(current_user.id))


@router.get("/patients/{patient_id}/dashboard")
async def patient_dashboard(
        patient_id: int,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    return success(CaregiverService(db).get_monitoring_dashboard(current_user.id, patient_id))


@router.get("/patients/{patient_id}/weekly-report")
async def weekly_report(
        patient_id: int,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    return success(CaregiverService(db).get_weekly_report(current_user.id, patient_id))


@router.get("/patients/{patient_id}/notes")
async def list_notes(
        patient_id: int,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    notes = CaregiverService(db).get_notes(current_user.id, patient_id)
    return success([serialize(CaregiverNoteResponse, n) for n in notes])


@router.post("/patients/{patient_id}/notes", status_code=status.HTTP_201_CREATED)
async def add_note(
        patient_id: int,
        note_data: CaregiverNoteCreate,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    note = CaregiverService(db).add_note(current_user.id, patient_id, payload_of(note_data))
    return success(serialize(CaregiverNoteResponse, note), "Caregiver note added successfully")
