"""
Doctor directory and appointment booking service
"""
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime
import logging

from carelink.core.exceptions import ForbiddenError, NotFoundError
from carelink.models.appointment import Appointment, Doctor
from carelink.schemas.appointment import AppointmentCreate, AppointmentUpdate
from carelink.validation.common import parse_payload

logger = logging.getLogger(__name__)


class AppointmentService:
    def __init__(self, db: Session):
        self.db = db

    # =========================
    # DOCTORS
    # =========================
    def get_doctors(self) -> List[Doctor]:
        return self.db.query(Doctor).order_by(Doctor.name).all()

    def search_doctors(self, specialty: Optional[str] = None, location: Optional[str] = None) -> List[Doctor]:
        """Case-insensitive partial match on specialty and location"""
        query = self.db.query(Doctor)
        if specialty:
            query = query.filter(Doctor.specialty.ilike(f"%{specialty.strip()}%"))
        if location:
            query = query.filter(Doctor.location.ilike(f"%{location.strip()}%"))
        return query.order_by(Doctor.name).all()

    def get_doctor(self, doctor_id: int) -> Doctor:
        doctor = self.db.query(Doctor).filter(Doctor.id == doctor_id).first()
        if not doctor:
            raise NotFoundError("Doctor not found")
        return doctor

    # =========================
    # APPOINTMENTS
    # =========================
    def get_appointments(self, user_id: int) -> List[Appointment]:
        """The user's appointments, soonest first"""
        return self.db.query(Appointment).filter(
            Appointment.user_id == user_id
        ).order_by(Appointment.appointment_date, Appointment.id).all()

    def get_appointment(self, appointment_id: int, user_id: int) -> Appointment:
        appointment = self.db.query(Appointment).filter(Appointment.id == appointment_id).first()
        if not appointment:
            raise NotFoundError("Appointment not found")
        if appointment.user_id != user_id:
            raise ForbiddenError("Access denied to this appointment")
        return appointment

    def book_appointment(self, user_id: int, payload: dict, now: Optional[datetime] = None) -> Appointment:
        data = parse_payload(AppointmentCreate, payload, now=now)
        doctor = self.get_doctor(data.doctor_id)

        appointment = Appointment(user_id=user_id, status="scheduled", **data.model_dump())
        self.db.add(appointment)
        self.db.commit()
        self.db.refresh(appointment)

        logger.info(f"Appointment booked with {doctor.name} for user {user_id} (ID: {appointment.id})")
        return appointment

    def update_appointment(
            self,
            appointment_id: int,
            user_id: int,
            payload: dict,
            now: Optional[datetime] = None
    ) -> Appointment:
        appointment = self.get_appointment(appointment_id, user_id)
        changes = parse_payload(AppointmentUpdate, payload, now=now)

        for field in changes.model_fields_set:
            value = getattr(changes, field)
            if value is None and field in ("appointment_date", "duration_minutes", "status", "follow_up_needed"):
                continue
            setattr(appointment, field, value)

        self.db.commit()
        self.db.refresh(appointment)

        logger.info(f"Appointment updated: ID {appointment.id}")
        return appointment

    def cancel_appointment(self, appointment_id: int, user_id: int):
        appointment = self.get_appointment(appointment_id, user_id)
        self.db.delete(appointment)
        self.db.commit()

        logger.info(f"Appointment cancelled: ID {appointment_id}")
