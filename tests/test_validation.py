from datetime import datetime, timedelta

import pytest

from carelink.core.exceptions import ValidationError
from carelink.schemas.emergency_contact import EmergencyContactCreate
from carelink.schemas.medication import MedicationCreate
from carelink.validation.community import validate_announcement, validate_comment, validate_review
from carelink.validation.emergency_contacts import validate_emergency_contact
from carelink.validation.health_metrics import (
    parse_blood_pressure,
    validate_health_metric,
    validate_health_metrics_query,
)
from carelink.validation.common import field_label, parse_payload
from carelink.validation.medications import validate_medication

NOW = datetime(2024, 6, 1, 12, 0)


def test_valid_metric():
    assert validate_health_metric({"metricType": "weight", "value": 65.5}, now=NOW) == []


def test_unknown_metric_type():
    errors = validate_health_metric({"metricType": "height", "value": 170}, now=NOW)
    assert any("Metric type must be one of" in e for e in errors)


@pytest.mark.parametrize("metric_type,value", [
    ("weight", 19),
    ("weight", 301),
    ("heart_rate", 29),
    ("oxygen_saturation", 101),
    ("pain_level", 11),
    ("steps", -1),
])
def test_out_of_range_values(metric_type, value):
    assert validate_health_metric({"metricType": metric_type, "value": value}, now=NOW)


@pytest.mark.parametrize("metric_type,value", [
    ("weight", 20),
    ("weight", 300),
    ("heart_rate", 220),
    ("mood", 0),
])
def test_range_bounds_are_inclusive(metric_type, value):
    assert validate_health_metric({"metricType": metric_type, "value": value}, now=NOW) == []


def test_blood_pressure_systolic_must_exceed_diastolic():
    errors = validate_health_metric({"metricType": "blood_pressure", "systolic": 120, "diastolic": 130}, now=NOW)
    assert "Systolic pressure must be higher than diastolic pressure" in errors

    errors = validate_health_metric({"metricType": "blood_pressure", "value": "120/130"}, now=NOW)
    assert "Systolic pressure must be higher than diastolic pressure" in errors


def test_blood_pressure_accepted_forms():
    assert parse_blood_pressure({"value": "120/80"}) == (120.0, 80.0)
    assert parse_blood_pressure({"value": 120, "diastolic": 80}) == (120.0, 80.0)
    assert parse_blood_pressure({"systolic": "118", "diastolic": "76"}) == (118.0, 76.0)
    assert parse_blood_pressure({"value": "high"}) is None
    assert validate_health_metric({"metricType": "blood_pressure", "value": "120/80"}, now=NOW) == []


def test_blood_pressure_needs_both_readings():
    errors = validate_health_metric({"metricType": "blood_pressure", "value": 120}, now=NOW)
    assert errors


def test_recorded_at_window():
    future = (NOW + timedelta(hours=1)).isoformat()
    too_old = (NOW - timedelta(days=366)).isoformat()
    recent = (NOW - timedelta(days=2)).isoformat() + "Z"

    assert "Recorded date cannot be in the future" in validate_health_metric(
        {"metricType": "mood", "value": 5, "recordedAt": future}, now=NOW)
    assert "Recorded date cannot be more than 1 year ago" in validate_health_metric(
        {"metricType": "mood", "value": 5, "recordedAt": too_old}, now=NOW)
    assert validate_health_metric({"metricType": "mood", "value": 5, "recordedAt": recent}, now=NOW) == []
    assert validate_health_metric({"metricType": "mood", "value": 5, "recordedAt": "yesterday"}, now=NOW)


def test_unit_and_notes_length():
    errors = validate_health_metric(
        {"metricType": "mood", "value": 5, "unit": "u" * 21, "notes": "n" * 501}, now=NOW)
    assert "Unit cannot exceed 20 characters" in errors
    assert "Notes cannot exceed 500 characters" in errors


def test_partial_metric_update():
    assert validate_health_metric({"notes": "after lunch"}, partial=True, now=NOW) == []
    assert validate_health_metric({}, partial=True, now=NOW)


def test_metrics_query():
    assert validate_health_metrics_query({"metricType": "weight", "limit": 10}) == []
    assert validate_health_metrics_query({"limit": 0})
    assert validate_health_metrics_query({"startDate": "2024-02-01", "endDate": "2024-01-01"})


def test_medication_validation():
    valid = {
        "name": "Amlodipine",
        "dosage": "5mg",
        "frequency": "once_daily",
        "timing": "08:30",
        "prescribedBy": "Dr Lim",
        "startDate": "2024-01-01",
        "endDate": "2024-06-01",
    }
    assert validate_medication(valid) == []

    errors = validate_medication(dict(valid, frequency="hourly", timing="25:00", endDate="2023-12-01"))
    assert any("Frequency must be one of" in e for e in errors)
    assert "Timing must be in HH:MM format" in errors
    assert "End date must be after start date" in errors

    errors = validate_medication({"name": "Amlodipine"})
    assert "Dosage is required" in errors
    assert "Prescribing doctor is required" in errors


def test_medication_partial_update():
    assert validate_medication({"dosage": "10mg"}, partial=True) == []
    assert validate_medication({}, partial=True) == ["At least one field must be provided for update"]


def test_announcement_validation():
    assert validate_announcement({"groupId": 1, "title": "Hello", "content": "Welcome"}) == []
    errors = validate_announcement({"groupId": 1, "title": "t" * 101, "content": "", "imageUrl": "not a url"})
    assert "Title cannot exceed 100 characters" in errors
    assert "Content is required" in errors
    assert "Image URL must be a valid URI" in errors


def test_comment_validation():
    assert validate_comment({"announcementId": 3, "content": "See you there"}) == []
    assert "Content cannot exceed 1000 characters" in validate_comment({"announcementId": 3, "content": "c" * 1001})


@pytest.mark.parametrize("rating,ok", [(1, True), (5, True), (0, False), (6, False), (4.5, False), (True, False)])
def test_review_rating(rating, ok):
    errors = validate_review({"facilityId": 1, "rating": rating})
    assert (errors == []) is ok


def test_emergency_contact_validation():
    valid = {"name": "Mei Ling", "relationship": "child", "phone": "+6591234567", "email": "mei@example.com"}
    assert validate_emergency_contact(valid) == []

    errors = validate_emergency_contact(dict(valid, relationship="boss", phone="12345678", email="nope"))
    assert any("Relationship must be one of" in e for e in errors)
    assert "Please enter a valid Singapore phone number" in errors
    assert "Please enter a valid email address" in errors


def test_blank_contact_email_is_optional():
    contact = {"name": "Mei Ling", "relationship": "child", "phone": "9123 4567", "email": "  "}
    assert validate_emergency_contact(contact) == []


def test_parse_payload_raises_with_messages():
    with pytest.raises(ValidationError) as exc_info:
        parse_payload(MedicationCreate, {"name": "Amlodipine", "frequency": "weekly"})

    errors = exc_info.value.errors
    assert "Dosage is required" in errors
    assert any(e.startswith("Frequency must be one of") for e in errors)


def test_parse_payload_returns_constrained_model():
    contact = parse_payload(EmergencyContactCreate, {
        "name": "  Mei Ling ", "relationship": "child", "phone": "9123 4567", "email": ""
    })
    assert contact.name == "Mei Ling"
    assert contact.phone == "91234567"
    assert contact.email is None


def test_field_labels():
    assert field_label("prescribedBy") == "Prescribing doctor"
    assert field_label("alertOnMissedMeds") == "Alert on missed meds"
