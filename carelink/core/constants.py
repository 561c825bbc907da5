"""
Business thresholds and enumerations shared across the application

Every compliance level, alert tier, metric range and trend polarity lives
here. Nothing else in the code base should hardcode these values.
"""
import enum


# =========================
# COMPLIANCE
# =========================
class ComplianceLevel(str, enum.Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# Minimum rate for each level, checked top-down
COMPLIANCE_LEVELS = (
    (80, ComplianceLevel.HIGH),
    (60, ComplianceLevel.MEDIUM),
    (0, ComplianceLevel.LOW),
)

# Rate reported when nothing was scheduled
NO_DOSES_COMPLIANCE = 100


# =========================
# ALERTS
# =========================
class AlertSeverity(str, enum.Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"


class AlertType(str, enum.Enum):
    COMPLIANCE = "compliance"
    BLOOD_PRESSURE = "blood_pressure"


# (upper bound exclusive, severity, message, recommendation)
COMPLIANCE_ALERT_TIERS = (
    (
        70,
        AlertSeverity.CRITICAL,
        "Medication compliance is critically low. Emergency contacts will be notified immediately.",
        "Contact primary care physician immediately",
    ),
    (
        80,
        AlertSeverity.HIGH,
        "Medication compliance is below target. Emergency contacts will be notified.",
        "Review medication schedule with caregiver",
    ),
    (
        90,
        AlertSeverity.MEDIUM,
        "Medication compliance could be improved.",
        "Consider medication reminder adjustments",
    ),
)

BLOOD_PRESSURE_SYSTOLIC_LIMIT = 140
BLOOD_PRESSURE_DIASTOLIC_LIMIT = 90
BLOOD_PRESSURE_ALERT_MESSAGE = "Average blood pressure is elevated. Consider consulting your doctor."
BLOOD_PRESSURE_ALERT_RECOMMENDATION = "Schedule appointment with cardiologist"

# Severities that trigger emergency-contact notification
NOTIFY_SEVERITIES = frozenset({AlertSeverity.CRITICAL, AlertSeverity.HIGH})


# =========================
# HEALTH METRICS
# =========================
METRIC_TYPES = (
    "blood_pressure",
    "weight",
    "heart_rate",
    "blood_sugar",
    "temperature",
    "cholesterol",
    "bmi",
    "oxygen_saturation",
    "pain_level",
    "mood",
    "steps",
)

# Inclusive (min, max) per metric type
METRIC_RANGES = {
    "weight": (20, 300),
    "heart_rate": (30, 220),
    "blood_sugar": (20, 600),
    "temperature": (30, 45),
    "cholesterol": (100, 500),
    "bmi": (10, 60),
    "oxygen_saturation": (50, 100),
    "pain_level": (0, 10),
    "mood": (0, 10),
    "steps": (0, 100000),
}
SYSTOLIC_RANGE = (50, 300)
DIASTOLIC_RANGE = (30, 200)

DEFAULT_UNITS = {
    "blood_pressure": "mmHg",
    "weight": "kg",
    "heart_rate": "bpm",
    "blood_sugar": "mg/dL",
    "temperature": "°C",
    "cholesterol": "mg/dL",
    "bmi": "kg/m²",
    "oxygen_saturation": "%",
    "pain_level": "/10",
    "mood": "/10",
    "steps": "steps",
}

METRIC_MAX_AGE_DAYS = 365
METRIC_UNIT_MAX_LENGTH = 20
METRIC_NOTES_MAX_LENGTH = 500


# =========================
# TRENDS
# =========================
class TrendPolarity(str, enum.Enum):
    LOWER_IS_BETTER = "lower_is_better"
    HIGHER_IS_BETTER = "higher_is_better"
    STABILITY_IS_BETTER = "stability_is_better"


class TrendDirection(str, enum.Enum):
    IMPROVING = "improving"
    CONCERNING = "concerning"
    STABLE = "stable"


TREND_POLARITY = {
    "blood_pressure": TrendPolarity.LOWER_IS_BETTER,
    "weight": TrendPolarity.LOWER_IS_BETTER,
    "blood_sugar": TrendPolarity.LOWER_IS_BETTER,
    "cholesterol": TrendPolarity.LOWER_IS_BETTER,
    "bmi": TrendPolarity.LOWER_IS_BETTER,
    "pain_level": TrendPolarity.LOWER_IS_BETTER,
    "oxygen_saturation": TrendPolarity.HIGHER_IS_BETTER,
    "mood": TrendPolarity.HIGHER_IS_BETTER,
    "steps": TrendPolarity.HIGHER_IS_BETTER,
    "heart_rate": TrendPolarity.STABILITY_IS_BETTER,
    "temperature": TrendPolarity.STABILITY_IS_BETTER,
}

# Samples averaged at each end of the window
TREND_SAMPLE_SIZE = 3
# Percent change beyond which a trend stops being stable
TREND_CHANGE_THRESHOLD = 10

_missing = set(METRIC_TYPES) - set(TREND_POLARITY)
if _missing:
    raise RuntimeError(f"Trend polarity missing for metric types: {sorted(_missing)}")


# =========================
# ADHERENCE TIME PATTERNS
# =========================
# (label, first hour, last hour); hours outside every band are Night
TIME_OF_DAY_BANDS = (
    ("Morning", 6, 11),
    ("Afternoon", 12, 17),
    ("Evening", 18, 21),
)
NIGHT_LABEL = "Night"
TIMING_SUGGESTION_THRESHOLD = 80


# =========================
# MEDICATIONS
# =========================
MEDICATION_FREQUENCIES = (
    "once_daily",
    "twice_daily",
    "three_times_daily",
    "four_times_daily",
    "as_needed",
)

COMPLIANCE_PERIODS = {
    "day": 1,
    "week": 7,
    "month": 30,
}

TREND_PERIODS = {
    "week": 7,
    "month": 30,
    "quarter": 90,
}


# =========================
# EMERGENCY CONTACTS
# =========================
CONTACT_RELATIONSHIPS = (
    "spouse",
    "child",
    "parent",
    "sibling",
    "relative",
    "friend",
    "neighbor",
    "caregiver",
    "doctor",
    "nurse",
    "social_worker",
)


# =========================
# CAREGIVERS
# =========================
CAREGIVER_RELATIONSHIPS = CONTACT_RELATIONSHIPS

CAREGIVER_ACCESS_LEVELS = (
    "monitoring",
    "alerts",
    "full",
)

CAREGIVER_NOTE_MAX_LENGTH = 1000


# =========================
# APPOINTMENTS
# =========================
APPOINTMENT_STATUSES = (
    "scheduled",
    "completed",
    "cancelled",
)

APPOINTMENT_DEFAULT_DURATION = 30  # minutes


# =========================
# CHAT
# =========================
MESSAGE_MAX_LENGTH = 1000
