"""
Emergency contact endpoints
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from carelink.core.database import get_db
from carelink.core.dependencies import get_current_user
from carelink.models.user import User
from carelink.schemas.common import payload_of, serialize, success
from carelink.schemas.emergency_contact import EmergencyContactCreate, EmergencyContactResponse
from carelink.services.emergency_contact_service import EmergencyContactService

router = APIRouter()


@router.get("")
async def list_contacts(
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    contacts = EmergencyContactService(db).get_contacts(current_user.id)
    return success([serialize(EmergencyContactResponse, c) for c in contacts])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_contact(
        contact_data: EmergencyContactCreate,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    contact = EmergencyContactService(db).create_contact(current_user.id, payload_of(contact_data))
    return success(serialize(EmergencyContactResponse, contact), "Emergency contact added successfully")


@router.delete("/{contact_id}")
async def delete_contact(
        contact_id: int,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    EmergencyContactService(db).delete_contact(contact_id, current_user.id)
    return success(message="Emergency contact removed successfully")
