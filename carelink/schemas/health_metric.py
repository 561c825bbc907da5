"""
Health metric schemas
"""
import re
from datetime import datetime, timedelta
from typing import Literal, Optional, Tuple, Union

from pydantic import Field, TypeAdapter, ValidationInfo, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from carelink.core.constants import (
    DIASTOLIC_RANGE,
    METRIC_MAX_AGE_DAYS,
    METRIC_NOTES_MAX_LENGTH,
    METRIC_RANGES,
    METRIC_TYPES,
    METRIC_UNIT_MAX_LENGTH,
    SYSTOLIC_RANGE,
)
from carelink.schemas.common import CamelModel
from carelink.validation.common import UtcDatetime, now_from

MetricType = Literal[METRIC_TYPES]

BLOOD_PRESSURE_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*/\s*(\d+(?:\.\d+)?)\s*$")

_number_adapter = TypeAdapter(float)


def _number(value) -> Optional[float]:
    if value is None:
        return None
    try:
        return _number_adapter.validate_python(value)
    except PydanticValidationError:
        return None


def parse_blood_pressure(payload: dict) -> Optional[Tuple[float, float]]:
    """
    Extract (systolic, diastolic) from any accepted blood pressure form:
    ``value="120/80"``, ``value`` + ``diastolic`` or ``systolic`` + ``diastolic``.
    """
    value = payload.get("value")
    if isinstance(value, str) and "/" in value:
        match = BLOOD_PRESSURE_PATTERN.match(value)
        if not match:
            return None
        return float(match.group(1)), float(match.group(2))

    systolic = payload.get("systolic")
    systolic = _number(value if systolic is None else systolic)
    diastolic = _number(payload.get("diastolic"))
    if systolic is None or diastolic is None:
        return None
    return systolic, diastolic


def check_reading(metric_type: str, payload: dict):
    """Raise ValueError when the reading is out of range for ``metric_type``"""
    if metric_type == "blood_pressure":
        reading = parse_blood_pressure(payload)
        if reading is None:
            raise ValueError("Blood pressure must be given as systolic/diastolic (e.g. 120/80)")
        systolic, diastolic = reading
        if not SYSTOLIC_RANGE[0] <= systolic <= SYSTOLIC_RANGE[1]:
            raise ValueError(f"Systolic pressure must be between {SYSTOLIC_RANGE[0]} and {SYSTOLIC_RANGE[1]}")
        if not DIASTOLIC_RANGE[0] <= diastolic <= DIASTOLIC_RANGE[1]:
            raise ValueError(f"Diastolic pressure must be between {DIASTOLIC_RANGE[0]} and {DIASTOLIC_RANGE[1]}")
        if systolic <= diastolic:
            raise ValueError("Systolic pressure must be higher than diastolic pressure")
        return

    value = _number(payload.get("value"))
    if value is None:
        raise ValueError("Value must be a number")
    low, high = METRIC_RANGES[metric_type]
    if not low <= value <= high:
        raise ValueError(f"{metric_type.replace('_', ' ').capitalize()} must be between {low} and {high}")


class HealthMetricFields(CamelModel):
    """Fields shared by create and update payloads"""
    value: Optional[Union[float, str]] = None
    systolic: Optional[float] = None
    diastolic: Optional[float] = None
    unit: Optional[str] = Field(None, max_length=METRIC_UNIT_MAX_LENGTH)
    notes: Optional[str] = Field(None, max_length=METRIC_NOTES_MAX_LENGTH)
    recorded_at: Optional[UtcDatetime] = None

    @field_validator("value")
    @classmethod
    def numeric_or_pair(cls, v):
        if isinstance(v, str):
            if "/" in v:
                if not BLOOD_PRESSURE_PATTERN.match(v):
                    raise ValueError("Blood pressure must be given as systolic/diastolic (e.g. 120/80)")
                return v
            number = _number(v)
            if number is None:
                raise ValueError("Value must be a number")
            return number
        return v

    @field_validator("recorded_at")
    @classmethod
    def recorded_within_window(cls, v, info: ValidationInfo):
        if v is None:
            return v
        now = now_from(info)
        if v > now:
            raise ValueError("Recorded date cannot be in the future")
        if v < now - timedelta(days=METRIC_MAX_AGE_DAYS):
            raise ValueError("Recorded date cannot be more than 1 year ago")
        return v

    def reading(self) -> dict:
        return {"value": self.value, "systolic": self.systolic, "diastolic": self.diastolic}


class HealthMetricCreate(HealthMetricFields):
    """
    Create payload.

    Blood pressure may be sent as ``value="120/80"``, as ``value`` plus
    ``diastolic``, or as ``systolic`` plus ``diastolic``.
    """
    metric_type: MetricType

    @model_validator(mode="after")
    def reading_in_range(self):
        if self.value is None and self.systolic is None:
            raise ValueError("Value is required")
        check_reading(self.metric_type, self.reading())
        return self


class HealthMetricUpdate(HealthMetricFields):
    """
    Partial update; the reading is re-checked against the stored row by
    the service once the two are merged
    """
    metric_type: Optional[MetricType] = None

    @model_validator(mode="after")
    def not_empty(self):
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided for update")
        return self


class HealthMetricsQuery(CamelModel):
    metric_type: Optional[MetricType] = None
    start_date: Optional[UtcDatetime] = None
    end_date: Optional[UtcDatetime] = None
    limit: int = Field(100, ge=1, le=1000)

    @model_validator(mode="after")
    def ordered_range(self):
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("Start date must be before end date")
        return self


class HealthMetricResponse(CamelModel):
    id: int
    metric_type: str
    value: float
    diastolic: Optional[float] = None
    unit: Optional[str] = None
    notes: Optional[str] = None
    recorded_at: datetime
    created_at: Optional[datetime] = None
