"""
Alert threshold classification
"""
from typing import List, Optional

from carelink.core.constants import (
    BLOOD_PRESSURE_ALERT_MESSAGE,
    BLOOD_PRESSURE_ALERT_RECOMMENDATION,
    BLOOD_PRESSURE_DIASTOLIC_LIMIT,
    BLOOD_PRESSURE_SYSTOLIC_LIMIT,
    COMPLIANCE_ALERT_TIERS,
    NOTIFY_SEVERITIES,
    AlertSeverity,
    AlertType,
)


def classify_compliance_alert(rate: float) -> Optional[dict]:
    """Alert for a compliance percentage, or None at 90% and above"""
    for upper, severity, message, recommendation in COMPLIANCE_ALERT_TIERS:
        if rate < upper:
            return {
                "type": AlertType.COMPLIANCE.value,
                "severity": severity.value,
                "message": message,
                "recommendation": recommendation,
            }
    return None


def classify_blood_pressure_alert(avg_systolic: Optional[float], avg_diastolic: Optional[float]) -> Optional[dict]:
    elevated = (
        (avg_systolic is not None and avg_systolic > BLOOD_PRESSURE_SYSTOLIC_LIMIT)
        or (avg_diastolic is not None and avg_diastolic > BLOOD_PRESSURE_DIASTOLIC_LIMIT)
    )
    if not elevated:
        return None
    return {
        "type": AlertType.BLOOD_PRESSURE.value,
        "severity": AlertSeverity.HIGH.value,
        "message": BLOOD_PRESSURE_ALERT_MESSAGE,
        "recommendation": BLOOD_PRESSURE_ALERT_RECOMMENDATION,
    }


def requires_notification(severity: str) -> bool:
    return AlertSeverity(severity) in NOTIFY_SEVERITIES


def collect_alerts(
        compliance_rate: Optional[float],
        avg_systolic: Optional[float] = None,
        avg_diastolic: Optional[float] = None
) -> List[dict]:
    """All alerts for one analysis window"""
    alerts = []
    if compliance_rate is not None:
        alert = classify_compliance_alert(compliance_rate)
        if alert:
            alerts.append(alert)
    alert = classify_blood_pressure_alert(avg_systolic, avg_diastolic)
    if alert:
        alerts.append(alert)
    return alerts
