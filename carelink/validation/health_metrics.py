"""
Health metric payload validation
"""
from datetime import datetime
from typing import List, Optional

from carelink.schemas.health_metric import (
    HealthMetricCreate,
    HealthMetricUpdate,
    HealthMetricsQuery,
    parse_blood_pressure,
)
from carelink.validation.common import collect_errors

__all__ = ["parse_blood_pressure", "validate_health_metric", "validate_health_metrics_query"]


def validate_health_metric(payload: dict, partial: bool = False, now: Optional[datetime] = None) -> List[str]:
    """
    Validate a create (or, with ``partial``, update) payload.

    Keys are the camelCase wire names. Returns a list of error messages,
    empty when the payload is valid.
    """
    schema = HealthMetricUpdate if partial else HealthMetricCreate
    return collect_errors(schema, payload, now=now)


def validate_health_metrics_query(params: dict) -> List[str]:
    """Validate list filters: metricType, startDate, endDate, limit"""
    return collect_errors(HealthMetricsQuery, {key: value for key, value in params.items() if value is not None})
