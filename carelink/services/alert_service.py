"""
Alert evaluation, history and dispatch
"""
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime, timedelta
import logging

from carelink.analytics.alerts import collect_alerts, requires_notification
from carelink.core.config import get_settings
from carelink.core.constants import AlertType
from carelink.models.alert import AlertHistory
from carelink.models.user import User
from carelink.services.emergency_contact_service import EmergencyContactService
from carelink.services.health_dashboard_service import HealthDashboardService
from carelink.services.notification_service import NotificationDispatcher

logger = logging.getLogger(__name__)

settings = get_settings()


class AlertService:
    def __init__(self, db: Session, dispatcher: NotificationDispatcher):
        self.db = db
        self.dispatcher = dispatcher

    def get_alerts(self, user_id: int, skip: int = 0, limit: int = 100) -> List[AlertHistory]:
        return self.db.query(AlertHistory).filter(
            AlertHistory.user_id == user_id
        ).order_by(AlertHistory.triggered_at.desc(), AlertHistory.id.desc()).offset(skip).limit(limit).all()

    def evaluate_and_dispatch(self, user: User, now: Optional[datetime] = None) -> List[dict]:
        """
        Evaluate the analysis window, record every alert and notify contacts
        for the severities that require it.
        """
        now = now or datetime.utcnow()
        dashboard = HealthDashboardService(self.db)

        rate = dashboard.compliance_rate_for_window(user.id, settings.ANALYTICS_WINDOW_DAYS, now=now)
        metrics = dashboard.metrics.get_metrics_since(
            user.id, now - timedelta(days=settings.ANALYTICS_WINDOW_DAYS)
        )
        avg_systolic, avg_diastolic = dashboard.metrics.blood_pressure_averages(metrics)

        contacts = EmergencyContactService(self.db).get_contacts(user.id)

        results = []
        for alert in collect_alerts(rate, avg_systolic, avg_diastolic):
            notified = 0
            if requires_notification(alert["severity"]):
                recipients = contacts
                if alert["type"] == AlertType.COMPLIANCE.value:
                    recipients = [c for c in contacts if c.alert_on_missed_meds]
                if recipients:
                    notified = self.dispatcher.dispatch(user, alert, recipients)

            record = AlertHistory(
                user_id=user.id,
                alert_type=alert["type"],
                severity=alert["severity"],
                message=alert["message"],
                recommendation=alert["recommendation"],
                notified=notified > 0,
                triggered_at=now,
            )
            self.db.add(record)
            results.append(dict(alert, notifiedContacts=notified))

            logger.info(f"Alert {alert['type']}/{alert['severity']} for user {user.id}, {notified} contact(s) notified")

        self.db.commit()
        return results
