"""
Health metric endpoints
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from carelink.core.database import get_db
from carelink.core.dependencies import get_current_user
from carelink.models.user import User
from carelink.schemas.common import payload_of, serialize, success
from carelink.schemas.health_metric import HealthMetricCreate, HealthMetricResponse, HealthMetricUpdate
from carelink.services.health_metric_service import HealthMetricService

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def record_health_metric(
        metric_data: HealthMetricCreate,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    """
    Record a health reading
    """
    metric = HealthMetricService(db).record_metric(current_user.id, payload_of(metric_data))
    return success(
        {
            "metricId": metric.id,
            "metricType": metric.metric_type,
            "value": metric.display_value,
            "unit": metric.unit,
            "recordedAt": metric.recorded_at.isoformat(),
        },
        "Health metric recorded successfully"
    )


@router.get("")
async def list_health_metrics(
        metric_type: Optional[str] = Query(None, alias="metricType"),
        start_date: Optional[str] = Query(None, alias="startDate"),
        end_date: Optional[str] = Query(None, alias="endDate"),
        limit: int = Query(100),
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    metrics = HealthMetricService(db).get_metrics(
        current_user.id,
        metric_type=metric_type,
        start_date=start_date,
        end_date=end_date,
        limit=limit
    )
    return success([serialize(HealthMetricResponse, m) for m in metrics])


@router.get("/{metric_id}")
async def get_health_metric(
        metric_id: int,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    metric = HealthMetricService(db).get_metric(metric_id, current_user.id)
    return success(serialize(HealthMetricResponse, metric))


@router.put("/{metric_id}")
async def update_health_metric(
        metric_id: int,
        metric_update: HealthMetricUpdate,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    metric = HealthMetricService(db).update_metric(metric_id, current_user.id, payload_of(metric_update))
    return success(serialize(HealthMetricResponse, metric), "Health metric updated successfully")


@router.delete("/{metric_id}")
async def delete_health_metric(
        metric_id: int,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    HealthMetricService(db).delete_metric(metric_id, current_user.id)
    return success(message="Health metric deleted successfully")
