# carelink/api/__init__.py
"""
Main API router
"""
from fastapi import APIRouter

from . import (
    alerts,
    announcements,
    appointments,
    auth,
    caregivers,
    chat,
    emergency_contacts,
    exercises,
    goals,
    groups,
    health_dashboard,
    health_metrics,
    medications,
    reviews,
)

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(medications.router, prefix="/medications", tags=["medications"])
api_router.include_router(health_metrics.router, prefix="/health-metrics", tags=["health metrics"])
api_router.include_router(health_dashboard.router, tags=["health dashboard"])
api_router.include_router(alerts.router, prefix="/alerts", tags=["alerts"])
api_router.include_router(emergency_contacts.router, prefix="/emergency-contacts", tags=["emergency contacts"])
api_router.include_router(groups.router, prefix="/groups", tags=["groups"])
api_router.include_router(announcements.router, prefix="/announcements", tags=["announcements"])
api_router.include_router(reviews.router, prefix="/reviews", tags=["reviews"])
api_router.include_router(goals.router, prefix="/goals", tags=["goals"])
api_router.include_router(exercises.router, prefix="/exercises", tags=["exercises"])
api_router.include_router(chat.router, prefix="/chat", tags=["chat"])
api_router.include_router(caregivers.router, prefix="/caregivers", tags=["caregivers"])
api_router.include_router(appointments.router, prefix="/appointments", tags=["appointments"])


@api_router.get("/health")
async def api_health():
    """API health check"""
    return {
        "status": "healthy",
        "service": "CareLink API",
        "version": "1.0.0"
    }
