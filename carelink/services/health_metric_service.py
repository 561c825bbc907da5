"""
Health metric service
"""
from sqlalchemy.orm import Session
from typing import Dict, List, Optional
from datetime import datetime
import logging

from carelink.core.constants import DEFAULT_UNITS
from carelink.core.exceptions import ForbiddenError, NotFoundError
from carelink.models.health_metric import HealthMetric
from carelink.schemas.common import payload_of
from carelink.schemas.health_metric import (
    HealthMetricCreate,
    HealthMetricUpdate,
    HealthMetricsQuery,
    parse_blood_pressure,
)
from carelink.validation.common import parse_payload

logger = logging.getLogger(__name__)


def _reading(data: HealthMetricCreate):
    """(value, diastolic) to store for a validated payload"""
    if data.metric_type == "blood_pressure":
        return parse_blood_pressure(data.reading())
    return data.value, None


def daily_aggregates(metrics: List[HealthMetric]) -> List[Dict]:
    """
    Per type and calendar day: average, min, max and count, oldest day first
    """
    buckets = {}
    for metric in metrics:
        key = (metric.metric_type, metric.recorded_at.date())
        buckets.setdefault(key, []).append(metric.value)

    rows = []
    for (metric_type, day), values in sorted(buckets.items(), key=lambda item: (item[0][0], item[0][1])):
        rows.append({
            "metricType": metric_type,
            "recordDate": day.isoformat(),
            "avgValue": round(sum(values) / len(values), 2),
            "minValue": min(values),
            "maxValue": max(values),
            "count": len(values),
        })
    return rows


class HealthMetricService:
    """Health readings owned by a user"""

    def __init__(self, db: Session):
        self.db = db

    def record_metric(self, user_id: int, payload: dict, now: Optional[datetime] = None) -> HealthMetric:
        data = parse_payload(HealthMetricCreate, payload, now=now)

        value, diastolic = _reading(data)
        metric = HealthMetric(
            user_id=user_id,
            metric_type=data.metric_type,
            value=value,
            diastolic=diastolic,
            unit=data.unit or DEFAULT_UNITS.get(data.metric_type),
            notes=data.notes,
            recorded_at=data.recorded_at or now or datetime.utcnow(),
        )

        self.db.add(metric)
        self.db.commit()
        self.db.refresh(metric)

        logger.info(f"Health metric recorded: {metric.metric_type} (ID: {metric.id}, user: {user_id})")
        return metric

    def get_metric(self, metric_id: int, user_id: int) -> HealthMetric:
        metric = self.db.query(HealthMetric).filter(HealthMetric.id == metric_id).first()
        if not metric:
            raise NotFoundError("Health metric not found")
        if metric.user_id != user_id:
            raise ForbiddenError("You are not authorized to access this health metric")
        return metric

    def get_metrics(
            self,
            user_id: int,
            metric_type: Optional[str] = None,
            start_date: Optional[str] = None,
            end_date: Optional[str] = None,
            limit: int = 100
    ) -> List[HealthMetric]:
        filters = parse_payload(HealthMetricsQuery, {
            key: value for key, value in (
                ("metricType", metric_type),
                ("startDate", start_date),
                ("endDate", end_date),
                ("limit", limit),
            ) if value is not None
        })

        query = self.db.query(HealthMetric).filter(HealthMetric.user_id == user_id)
        if filters.metric_type:
            query = query.filter(HealthMetric.metric_type == filters.metric_type)
        if filters.start_date:
            query = query.filter(HealthMetric.recorded_at >= filters.start_date)
        if filters.end_date:
            query = query.filter(HealthMetric.recorded_at <= filters.end_date)

        return query.order_by(HealthMetric.recorded_at.desc()).limit(filters.limit).all()

    def get_metrics_since(self, user_id: int, since: datetime) -> List[HealthMetric]:
        """Readings recorded since ``since``, oldest first"""
        return self.db.query(HealthMetric).filter(
            HealthMetric.user_id == user_id,
            HealthMetric.recorded_at >= since
        ).order_by(HealthMetric.recorded_at).all()

    def update_metric(
            self,
            metric_id: int,
            user_id: int,
            payload: dict,
            now: Optional[datetime] = None
    ) -> HealthMetric:
        """
        Apply a partial update.

        The stored type and reading fill in whatever the update leaves out
        and the merged reading is validated as a whole, so changing only the
        type or only the diastolic value is checked like a new reading.
        """
        metric = self.get_metric(metric_id, user_id)
        changes = parse_payload(HealthMetricUpdate, payload, now=now)
        sent = {key: value for key, value in payload_of(changes).items() if value is not None}

        merged = {"metricType": metric.metric_type, "value": metric.value}
        if metric.diastolic is not None:
            merged["diastolic"] = metric.diastolic
        merged.update({key: sent[key] for key in ("metricType", "value", "systolic", "diastolic") if key in sent})
        reading = parse_payload(HealthMetricCreate, merged, now=now)

        type_changed = reading.metric_type != metric.metric_type
        metric.metric_type = reading.metric_type
        metric.value, metric.diastolic = _reading(reading)
        if "unit" in changes.model_fields_set:
            metric.unit = changes.unit
        elif type_changed:
            metric.unit = DEFAULT_UNITS.get(reading.metric_type)
        if "notes" in changes.model_fields_set:
            metric.notes = changes.notes
        if changes.recorded_at is not None:
            metric.recorded_at = changes.recorded_at

        self.db.commit()
        self.db.refresh(metric)

        logger.info(f"Health metric updated: {metric.metric_type} (ID: {metric.id})")
        return metric

    def delete_metric(self, metric_id: int, user_id: int):
        metric = self.get_metric(metric_id, user_id)
        self.db.delete(metric)
        self.db.commit()

        logger.info(f"Health metric deleted: ID {metric_id}")

    def blood_pressure_averages(self, metrics: List[HealthMetric]):
        """(avg systolic, avg diastolic) over blood pressure readings, or (None, None)"""
        readings = [m for m in metrics if m.metric_type == "blood_pressure" and m.diastolic is not None]
        if not readings:
            return None, None
        systolic = sum(m.value for m in readings) / len(readings)
        diastolic = sum(m.diastolic for m in readings) / len(readings)
        return round(systolic, 1), round(diastolic, 1)
