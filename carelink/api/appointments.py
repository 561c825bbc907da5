"""
Doctor directory and appointment endpoints
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from carelink.core.database import get_db
from carelink.core.dependencies import get_current_user
from carelink.models.user import User
from carelink.schemas.appointment import (
    AppointmentCreate,
    AppointmentResponse,
    AppointmentUpdate,
    DoctorResponse,
)
from carelink.schemas.common import payload_of, serialize, success
from carelink.services.appointment_service import AppointmentService

router = APIRouter()


@router.get("/doctors")
async def list_doctors(
        specialty: Optional[str] = Query(None),
        location: Optional[str] = Query(None),
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    """
    Every doctor, or those matching ``specialty`` and/or ``location``
    """
    service = AppointmentService(db)
    if specialty or location:
        doctors = service.search_doctors(specialty=specialty, location=location)
    else:
        doctors = service.get_doctors()
    return success([serialize(DoctorResponse, d) for d in doctors])


@router.get("")
async def list_appointments(
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    appointments = AppointmentService(db).get_appointments(current_user.id)
    return success([serialize(AppointmentResponse, a) for a in appointments])


@router.post("", status_code=status.HTTP_201_CREATED)
async def book_appointment(
        appointment_data: AppointmentCreate,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    appointment = AppointmentService(db).book_appointment(current_user.id, payload_of(appointment_data))
    return success(serialize(AppointmentResponse, appointment), "Appointment booked successfully")


@router.get("/{appointment_id}")
async def get_appointment(
        appointment_id: int,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    appointment = AppointmentService(db).get_appointment(appointment_id, current_user.id)
    data = serialize(AppointmentResponse, appointment)
    data["doctor"] = serialize(DoctorResponse, appointment.doctor)
    return success(data)


@router.put("/{appointment_id}")
async def update_appointment(
        appointment_id: int,
        appointment_update: AppointmentUpdate,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    appointment = AppointmentService(db).update_appointment(
        appointment_id, current_user.id, payload_of(appointment_update)
    )
    return success(serialize(AppointmentResponse, appointment), "Appointment updated successfully")


@router.delete("/{appointment_id}")
async def cancel_appointment(
        appointment_id: int,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    AppointmentService(db).cancel_appointment(appointment_id, current_user.id)
    return success(message="Appointment cancelled successfully")
