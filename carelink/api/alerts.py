"""
Alert endpoints
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from carelink.core.database import get_db
from carelink.core.dependencies import get_current_user, get_pagination_params, PaginationParams
from carelink.models.user import User
from carelink.schemas.common import serialize, success
from carelink.schemas.emergency_contact import AlertResponse
from carelink.services.alert_service import AlertService
from carelink.services.notification_service import NotificationDispatcher, get_dispatcher

router = APIRouter()


@router.get("")
async def list_alerts(
        pagination: PaginationParams = Depends(get_pagination_params),
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db),
        dispatcher: NotificationDispatcher = Depends(get_dispatcher)
):
    alerts = AlertService(db, dispatcher).get_alerts(current_user.id, skip=pagination.skip, limit=pagination.limit)
    return success([serialize(AlertResponse, alert) for alert in alerts])


@router.post("/evaluate")
async def evaluate_alerts(
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db),
        dispatcher: NotificationDispatcher = Depends(get_dispatcher)
):
    """
    Evaluate compliance and blood pressure, record the resulting alerts
    and notify emergency contacts where the severity requires it
    """
    alerts = AlertService(db, dispatcher).evaluate_and_dispatch(current_user)
    return success(alerts, f"{len(alerts)} alert(s) generated")
