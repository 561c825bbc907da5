"""
Caregiver monitoring service
"""
from sqlalchemy.orm import Session
from typing import Dict, List, Optional
from datetime import datetime, timedelta
import logging

from carelink.analytics.compliance import compute_compliance, daily_breakdown
from carelink.core.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from carelink.models.caregiver import CaregiverNote, CaregiverRelationship
from carelink.schemas.caregiver import CaregiverNoteCreate, CaregiverRelationshipCreate
from carelink.services.alert_service import AlertService
from carelink.services.auth_service import AuthService
from carelink.services.health_dashboard_service import HealthDashboardService
from carelink.services.health_metric_service import HealthMetricService
from carelink.services.medication_service import MedicationService
from carelink.services.notification_service import get_dispatcher
from carelink.validation.common import parse_payload

logger = logging.getLogger(__name__)

RECENT_METRICS_LIMIT = 10
RECENT_ALERTS_LIMIT = 5
REPORT_DAYS = 7


class CaregiverService:
    """Caregivers read a patient's data only through an active relationship"""

    def __init__(self, db: Session):
        self.db = db

    def create_relationship(self, caregiver_id: int, payload: dict) -> CaregiverRelationship:
        data = parse_payload(CaregiverRelationshipCreate, payload)

        patient = AuthService(self.db).get_user_by_email(data.patient_email)
        if patient is None:
            raise NotFoundError("Patient not found")
        if patient.id == caregiver_id:
            raise ValidationError(errors=["You cannot add yourself as a patient"])

        link = self.db.query(CaregiverRelationship).filter(
            CaregiverRelationship.caregiver_id == caregiver_id,
            CaregiverRelationship.patient_id == patient.id
        ).first()
        if link and link.is_active:
            raise ConflictError("Caregiver relationship already exists")

        if link is None:
            link = CaregiverRelationship(caregiver_id=caregiver_id, patient_id=patient.id)
            self.db.add(link)
        link.relationship_type = data.relationship
        link.access_level = data.access_level
        link.is_active = True
        self.db.commit()
        self.db.refresh(link)

        logger.info(f"Caregiver {caregiver_id} linked to patient {patient.id} (ID: {link.id})")
        return link

    def remove_relationship(self, relationship_id: int, caregiver_id: int):
        link = self.db.query(CaregiverRelationship).filter(
            CaregiverRelationship.id == relationship_id,
            CaregiverRelationship.is_active.is_(True)
        ).first()
        if not link:
            raise NotFoundError("Caregiver relationship not found")
        if link.caregiver_id != caregiver_id:
            raise ForbiddenError("You are not authorized to modify this relationship")

        link.is_active = False
        self.db.commit()

        logger.info(f"Caregiver relationship deactivated: ID {relationship_id}")

    def get_patients(self, caregiver_id: int) -> List[Dict]:
        links = self.db.query(CaregiverRelationship).filter(
            CaregiverRelationship.caregiver_id == caregiver_id,
            CaregiverRelationship.is_active.is_(True)
        ).order_by(CaregiverRelationship.id).all()

        return [
            {
                "relationshipId": link.id,
                "patientId": link.patient_id,
                "patientName": link.patient.name,
                "patientEmail": link.patient.email,
                "relationship": link.relationship_type,
                "accessLevel": link.access_level,
            }
            for link in links
        ]

    def require_access(self, caregiver_id: int, patient_id: int) -> CaregiverRelationship:
        link = self.db.query(CaregiverRelationship).filter(
            CaregiverRelationship.caregiver_id == caregiver_id,
            CaregiverRelationship.patient_id == patient_id,
            CaregiverRelationship.is_active.is_(True)
        ).first()
        if not link:
            raise ForbiddenError("Access denied to this patient")
        return link

    def get_monitoring_dashboard(self, caregiver_id: int, patient_id: int, now: Optional[datetime] = None) -> Dict:
        """The patient's adherence dashboard plus their latest readings and alerts"""
        link = self.require_access(caregiver_id, patient_id)
        now = now or datetime.utcnow()

        metrics = HealthMetricService(self.db).get_metrics(patient_id, limit=RECENT_METRICS_LIMIT)
        alerts = AlertService(self.db, get_dispatcher()).get_alerts(patient_id, limit=RECENT_ALERTS_LIMIT)

        return {
            "patient": {"id": link.patient.id, "name": link.patient.name, "email": link.patient.email},
            "accessLevel": link.access_level,
            "adherence": HealthDashboardService(self.db).get_dashboard(patient_id, now=now),
            "recentMetrics": [
                {
                    "metricId": m.id,
                    "metricType": m.metric_type,
                    "value": m.display_value,
                    "unit": m.unit,
                    "recordedAt": m.recorded_at.isoformat(),
                }
                for m in metrics
            ],
            "recentAlerts": [
                {
                    "alertType": a.alert_type,
                    "severity": a.severity,
                    "message": a.message,
                    "triggeredAt": a.triggered_at.isoformat() if a.triggered_at else None,
                }
                for a in alerts
            ],
        }

    def get_weekly_report(self, caregiver_id: int, patient_id: int, now: Optional[datetime] = None) -> Dict:
        self.require_access(caregiver_id, patient_id)
        now = now or datetime.utcnow()
        start = now - timedelta(days=REPORT_DAYS - 1)
        window_start = datetime.combine(start.date(), datetime.min.time())

        logs = MedicationService(self.db).get_due_logs(patient_id, since=window_start, now=now)
        summary = compute_compliance(logs)
        days = daily_breakdown(logs, start, now)

        return {
            "patientId": patient_id,
            "periodStart": start.date().isoformat(),
            "periodEnd": now.date().isoformat(),
            "totalDoses": summary["totalDoses"],
            "takenDoses": summary["takenDoses"],
            "missedDoses": summary["totalDoses"] - summary["takenDoses"],
            "complianceRate": summary["complianceRate"],
            "complianceLevel": summary["complianceLevel"],
            "perfectDays": sum(1 for day in days if day["totalDoses"] and day["perfectDay"]),
            "dailyBreakdown": days,
        }

    # =========================
    # NOTES
    # =========================
    def add_note(
            self,
            caregiver_id: int,
            patient_id: int,
            payload: dict,
            now: Optional[datetime] = None
    ) -> CaregiverNote:
        self.require_access(caregiver_id, patient_id)
        data = parse_payload(CaregiverNoteCreate, payload)

        note = CaregiverNote(
            caregiver_id=caregiver_id,
            patient_id=patient_id,
            note=data.note,
            created_at=now or datetime.utcnow(),
        )
        self.db.add(note)
        self.db.commit()
        self.db.refresh(note)

        logger.info(f"Caregiver note added for patient {patient_id} by caregiver {caregiver_id}")
        return note

    def get_notes(self, caregiver_id: int, patient_id: int) -> List[CaregiverNote]:
        """Notes this caregiver wrote about the patient, newest first"""
        self.require_access(caregiver_id, patient_id)
        return self.db.query(CaregiverNote).filter(
            CaregiverNote.caregiver_id == caregiver_id,
            CaregiverNote.patient_id == patient_id
        ).order_by(CaregiverNote.created_at.desc(), CaregiverNote.id.desc()).all()
