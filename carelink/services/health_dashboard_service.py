"""
Health dashboard and analytics service

Loads the user's dose logs and health readings through the other services
and hands them to the pure functions in ``carelink.analytics``.
"""
from sqlalchemy.orm import Session
from typing import Dict, Optional
from datetime import datetime, timedelta
import logging

from carelink.analytics.alerts import collect_alerts
from carelink.analytics.compliance import (
    compliance_rate,
    compute_compliance,
    daily_breakdown,
    time_of_day_breakdown,
    weekly_breakdown,
)
from carelink.analytics.trends import analyze_trends, blood_pressure_direction, detect_streaks
from carelink.core.config import get_settings
from carelink.core.constants import TIMING_SUGGESTION_THRESHOLD, TREND_PERIODS
from carelink.core.exceptions import ValidationError
from carelink.services.health_metric_service import HealthMetricService, daily_aggregates
from carelink.services.medication_service import MedicationService

logger = logging.getLogger(__name__)

settings = get_settings()

RECENT_MISSED_LIMIT = 10


class HealthDashboardService:
    """Aggregated compliance and health views for one user"""

    def __init__(self, db: Session):
        self.db = db
        self.medications = MedicationService(db)
        self.metrics = HealthMetricService(db)

    def get_dashboard(self, user_id: int, now: Optional[datetime] = None) -> Dict:
        now = now or datetime.utcnow()
        window_start = now - timedelta(days=settings.ANALYTICS_WINDOW_DAYS)
        logs = self.medications.get_due_logs(user_id, since=window_start, now=now)

        overall = compute_compliance(logs)

        daily = [
            {key: day[key] for key in ("date", "totalDoses", "takenDoses", "dailyCompliance")}
            for day in daily_breakdown(logs, window_start, now)
            if day["totalDoses"] > 0
        ]
        daily.reverse()

        logs_by_medication = {}
        for log in logs:
            logs_by_medication.setdefault(log.medication_id, []).append(log)

        medication_adherence = []
        for medication in self.medications.get_medications(user_id):
            summary = compute_compliance(logs_by_medication.get(medication.id, []))
            medication_adherence.append({
                "medicationId": medication.id,
                "medicationName": medication.name,
                "dosage": medication.dosage,
                "frequency": medication.frequency,
                "totalDoses": summary["totalDoses"],
                "takenDoses": summary["takenDoses"],
                "missedDoses": summary["totalDoses"] - summary["takenDoses"],
                "adherenceRate": summary["complianceRate"],
            })
        medication_adherence.sort(key=lambda row: row["adherenceRate"])

        missed = [log for log in logs if not log.taken]
        missed.sort(key=lambda log: log.scheduled_time, reverse=True)
        recent_missed = [
            {
                "logId": log.id,
                "medicationName": log.medication.name,
                "dosage": log.medication.dosage,
                "scheduledTime": log.scheduled_time.isoformat(),
                "hoursOverdue": int((now - log.scheduled_time).total_seconds() // 3600),
            }
            for log in missed[:RECENT_MISSED_LIMIT]
        ]

        trend_start = now - timedelta(weeks=settings.TREND_WINDOW_WEEKS)
        weekly = weekly_breakdown(self.medications.get_due_logs(user_id, since=trend_start, now=now))

        return {
            "overallStats": {
                "totalDoses": overall["totalDoses"],
                "takenDoses": overall["takenDoses"],
                "overallCompliance": overall["complianceRate"],
            },
            "dailyAdherence": daily,
            "medicationAdherence": medication_adherence,
            "recentMissed": recent_missed,
            "weeklyTrends": weekly,
        }

    def get_adherence_analytics(self, user_id: int, now: Optional[datetime] = None) -> Dict:
        now = now or datetime.utcnow()
        window_start = now - timedelta(days=settings.ANALYTICS_WINDOW_DAYS)
        logs = self.medications.get_due_logs(user_id, since=window_start, now=now)

        days = daily_breakdown(logs, window_start, now)
        patterns = time_of_day_breakdown(logs)

        suggestions = []
        if patterns:
            worst = patterns[-1]
            if worst["adherenceRate"] < TIMING_SUGGESTION_THRESHOLD:
                suggestions.append({
                    "type": "timing",
                    "priority": "high",
                    "message": (
                        f"Consider setting additional reminders for {worst['timeOfDay'].lower()} medications. "
                        f"Your adherence rate is {worst['adherenceRate']}% during this time."
                    ),
                })

        return {
            "streakAnalysis": detect_streaks(days),
            "timePatterns": patterns,
            "suggestions": suggestions,
            "generatedAt": now.isoformat(),
        }

    def get_health_analytics(self, user_id: int, days: int = 30, now: Optional[datetime] = None) -> Dict:
        if not 1 <= days <= 365:
            raise ValidationError(errors=["Days must be between 1 and 365"])

        now = now or datetime.utcnow()
        start = now - timedelta(days=days)

        logs = self.medications.get_due_logs(user_id, since=start, now=now)
        compliance = compute_compliance(logs)
        metrics = self.metrics.get_metrics_since(user_id, start)

        by_type = {}
        for metric in metrics:
            by_type.setdefault(metric.metric_type, []).append(metric.value)
        averages = [
            {
                "metricType": metric_type,
                "average": round(sum(values) / len(values), 2),
                "min": min(values),
                "max": max(values),
                "count": len(values),
            }
            for metric_type, values in by_type.items()
        ]

        avg_systolic, avg_diastolic = self.metrics.blood_pressure_averages(metrics)
        alerts = collect_alerts(compliance["complianceRate"], avg_systolic, avg_diastolic)
        if alerts:
            logger.info(f"Health analytics for user {user_id}: {len(alerts)} alert(s) over {days} days")

        streak = detect_streaks(daily_breakdown(logs, start, now))

        return {
            "period": {
                "days": days,
                "startDate": start.date().isoformat(),
                "endDate": now.date().isoformat(),
            },
            "analytics": {
                "averages": averages,
                "trends": analyze_trends(daily_aggregates(metrics)),
                "alerts": alerts,
                "streak": streak,
                "bloodPressure": {
                    "averageSystolic": avg_systolic,
                    "averageDiastolic": avg_diastolic,
                    "direction": blood_pressure_direction(by_type.get("blood_pressure", [])),
                },
            },
            "summary": {
                "overallCompliance": compliance["complianceRate"],
                "complianceLevel": compliance["complianceLevel"],
                "totalMetrics": len(metrics),
                "alertCount": len(alerts),
            },
        }

    def get_health_trends(self, user_id: int, period: str = "month", now: Optional[datetime] = None) -> Dict:
        if period not in TREND_PERIODS:
            raise ValidationError(errors=[f"Period must be one of: {', '.join(TREND_PERIODS)}"])

        now = now or datetime.utcnow()
        metrics = self.metrics.get_metrics_since(user_id, now - timedelta(days=TREND_PERIODS[period]))
        rows = daily_aggregates(metrics)

        return {
            "period": period,
            "trends": rows,
            "analysis": analyze_trends(rows),
        }

    def compliance_rate_for_window(self, user_id: int, days: int, now: Optional[datetime] = None) -> Optional[int]:
        """Overall rate over the last ``days``, or None when nothing was due"""
        now = now or datetime.utcnow()
        logs = self.medications.get_due_logs(user_id, since=now - timedelta(days=days), now=now)
        if not logs:
            return None
        return compliance_rate(sum(1 for log in logs if log.taken), len(logs))
