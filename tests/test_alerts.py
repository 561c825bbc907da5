import pytest

from carelink.analytics.alerts import (
    classify_blood_pressure_alert,
    classify_compliance_alert,
    collect_alerts,
    requires_notification,
)
from carelink.analytics.compliance import compute_compliance
from carelink.services.notification_service import NotificationDispatcher, get_dispatcher


@pytest.mark.parametrize("rate,severity", [
    (65, "critical"),
    (69.9, "critical"),
    (70, "high"),
    (75, "high"),
    (85, "medium"),
    (89, "medium"),
])
def test_compliance_alert_tiers(rate, severity):
    alert = classify_compliance_alert(rate)
    assert alert["type"] == "compliance"
    assert alert["severity"] == severity


@pytest.mark.parametrize("rate", [90, 95, 100])
def test_no_alert_at_or_above_ninety(rate):
    assert classify_compliance_alert(rate) is None


def test_critical_alert_text():
    alert = classify_compliance_alert(50)
    assert alert["message"] == (
        "Medication compliance is critically low. Emergency contacts will be notified immediately."
    )
    assert alert["recommendation"] == "Contact primary care physician immediately"


def test_nine_of_ten_doses_raises_no_alert():
    summary = compute_compliance([{"taken": i < 9} for i in range(10)])
    assert summary["complianceRate"] == 90
    assert summary["complianceLevel"] == "high"
    assert classify_compliance_alert(summary["complianceRate"]) is None


def test_six_of_ten_doses_is_medium_level_with_critical_alert():
    summary = compute_compliance([{"taken": i < 6} for i in range(10)])
    assert summary["complianceRate"] == 60
    assert summary["complianceLevel"] == "medium"
    assert classify_compliance_alert(summary["complianceRate"])["severity"] == "critical"


@pytest.mark.parametrize("systolic,diastolic,expected", [
    (141, 80, True),
    (130, 91, True),
    (140, 90, False),
    (None, None, False),
])
def test_blood_pressure_alert(systolic, diastolic, expected):
    alert = classify_blood_pressure_alert(systolic, diastolic)
    assert (alert is not None) is expected
    if alert:
        assert alert["type"] == "blood_pressure"
        assert alert["severity"] == "high"


def test_notification_severities():
    assert requires_notification("critical")
    assert requires_notification("high")
    assert not requires_notification("medium")


def test_collect_alerts_combines_sources():
    alerts = collect_alerts(72, 150, 95)
    assert [a["type"] for a in alerts] == ["compliance", "blood_pressure"]


def test_dispatcher_must_implement_dispatch():
    with pytest.raises(TypeError):
        NotificationDispatcher()

    class Incomplete(NotificationDispatcher):
        pass

    with pytest.raises(TypeError):
        Incomplete()

    assert isinstance(get_dispatcher(), NotificationDispatcher)
