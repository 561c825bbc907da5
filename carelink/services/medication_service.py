"""
Medication and dose log service
"""
from sqlalchemy.orm import Session
from typing import Dict, List, Optional
from datetime import datetime, timedelta
import logging

from carelink.analytics.compliance import compute_compliance, medication_compliance
from carelink.core.constants import COMPLIANCE_PERIODS
from carelink.core.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from carelink.models.medication import Medication, MedicationLog
from carelink.schemas.medication import MedicationCreate, MedicationUpdate
from carelink.validation.common import parse_payload

logger = logging.getLogger(__name__)

# Columns that cannot be cleared by an update
_REQUIRED_COLUMNS = {"name", "dosage", "frequency", "prescribed_by"}


class MedicationService:
    """Medications owned by a user and their scheduled doses"""

    def __init__(self, db: Session):
        self.db = db

    def get_medications(self, user_id: int, include_inactive: bool = False) -> List[Medication]:
        query = self.db.query(Medication).filter(Medication.user_id == user_id)
        if not include_inactive:
            query = query.filter(Medication.active.is_(True))
        return query.order_by(Medication.name).all()

    def get_medication(self, medication_id: int, user_id: int) -> Medication:
        """Fetch a medication the user owns"""
        medication = self.db.query(Medication).filter(Medication.id == medication_id).first()
        if not medication:
            raise NotFoundError("Medication not found")
        if medication.user_id != user_id:
            raise ForbiddenError("You are not authorized to access this medication")
        return medication

    def create_medication(self, user_id: int, payload: dict) -> Medication:
        data = parse_payload(MedicationCreate, payload)

        medication = Medication(user_id=user_id, active=True, **data.model_dump())

        self.db.add(medication)
        self.db.commit()
        self.db.refresh(medication)

        logger.info(f"Medication created: {medication.name} (ID: {medication.id}, user: {user_id})")
        return medication

    def update_medication(self, medication_id: int, user_id: int, payload: dict) -> Medication:
        medication = self.get_medication(medication_id, user_id)
        changes = parse_payload(MedicationUpdate, payload)

        # Date ordering is checked against the stored value of the other bound
        bounds = {
            "start_date": medication.start_date,
            "end_date": medication.end_date,
        }
        bounds.update({key: getattr(changes, key) for key in bounds if key in changes.model_fields_set})
        parse_payload(MedicationUpdate, bounds)

        for field in changes.model_fields_set:
            value = getattr(changes, field)
            if value is None and field in _REQUIRED_COLUMNS:
                continue
            setattr(medication, field, value)

        self.db.commit()
        self.db.refresh(medication)

        logger.info(f"Medication updated: {medication.name} (ID: {medication.id})")
        return medication

    def deactivate_medication(self, medication_id: int, user_id: int) -> Medication:
        medication = self.get_medication(medication_id, user_id)
        medication.active = False
        self.db.commit()

        logger.info(f"Medication deactivated: {medication.name} (ID: {medication.id})")
        return medication

    # =========================
    # DOSE LOGS
    # =========================
    def get_due_logs(
            self,
            user_id: int,
            since: Optional[datetime] = None,
            now: Optional[datetime] = None,
            active_only: bool = False
    ) -> List[MedicationLog]:
        """Logs already due (scheduled no later than now), oldest first"""
        now = now or datetime.utcnow()
        query = self.db.query(MedicationLog).join(Medication).filter(
            Medication.user_id == user_id,
            MedicationLog.scheduled_time <= now
        )
        if since is not None:
            query = query.filter(MedicationLog.scheduled_time >= since)
        if active_only:
            query = query.filter(Medication.active.is_(True))
        return query.order_by(MedicationLog.scheduled_time).all()

    def get_logs(self, medication_id: int, user_id: int) -> List[MedicationLog]:
        medication = self.get_medication(medication_id, user_id)
        return self.db.query(MedicationLog).filter(
            MedicationLog.medication_id == medication.id
        ).order_by(MedicationLog.scheduled_time.desc()).all()

    def mark_taken(self, log_id: int, user_id: int, taken_at: Optional[datetime] = None) -> MedicationLog:
        """Mark a scheduled dose as taken; a dose can only be taken once"""
        log = self.db.query(MedicationLog).filter(MedicationLog.id == log_id).first()
        if not log:
            raise NotFoundError("Medication log not found")
        if log.medication.user_id != user_id:
            raise ForbiddenError("You are not authorized to update this medication log")
        if log.taken:
            raise ConflictError("This dose has already been marked as taken")

        log.taken = True
        log.taken_at = taken_at or datetime.utcnow()
        self.db.commit()
        self.db.refresh(log)

        logger.info(f"Dose taken: log {log.id} for medication {log.medication_id}")
        return log

    # =========================
    # COMPLIANCE
    # =========================
    def _window_start(self, period: str, now: datetime) -> datetime:
        if period not in COMPLIANCE_PERIODS:
            raise ValidationError(
                errors=[f"Period must be one of: {', '.join(COMPLIANCE_PERIODS)}"]
            )
        return now - timedelta(days=COMPLIANCE_PERIODS[period])

    def get_compliance(self, user_id: int, period: str = "week", now: Optional[datetime] = None) -> List[Dict]:
        """Per-medication compliance rows for the active medications"""
        now = now or datetime.utcnow()
        since = self._window_start(period, now)

        logs_by_medication = {}
        for log in self.get_due_logs(user_id, since=since, now=now, active_only=True):
            logs_by_medication.setdefault(log.medication_id, []).append(log)

        return [
            medication_compliance(medication, logs_by_medication.get(medication.id, []))
            for medication in self.get_medications(user_id)
        ]

    def get_overall_compliance(self, user_id: int, since: datetime, now: Optional[datetime] = None) -> Dict:
        return compute_compliance(self.get_due_logs(user_id, since=since, now=now))
