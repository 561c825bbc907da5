"""
Health dashboard, analytics and trend endpoints
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from carelink.core.database import get_db
from carelink.core.dependencies import get_current_user
from carelink.models.user import User
from carelink.schemas.common import success
from carelink.services.health_dashboard_service import HealthDashboardService

router = APIRouter()


@router.get("/health-dashboard")
async def get_health_dashboard(
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    """
    Compliance overview: overall stats, daily and weekly adherence,
    per-medication adherence and the most recent missed doses
    """
    return success(HealthDashboardService(db).get_dashboard(current_user.id))


@router.get("/health-dashboard/adherence-analytics")
async def get_adherence_analytics(
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    return success(HealthDashboardService(db).get_adherence_analytics(current_user.id))


@router.get("/health-analytics")
async def get_health_analytics(
        days: int = Query(30),
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    return success(HealthDashboardService(db).get_health_analytics(current_user.id, days=days))


@router.get("/health-trends")
async def get_health_trends(
        period: str = Query("month", description="week, month or quarter"),
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    return success(HealthDashboardService(db).get_health_trends(current_user.id, period=period))
