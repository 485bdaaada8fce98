"""
Dashboard endpoints

- GET /api/v1/dashboard/user - client totals and recent bookings
- GET /api/v1/dashboard/lawyer - lawyer bookings, clients, earnings and slots
"""

from fastapi import APIRouter, Depends

from app.api.routes.availability import require_lawyer_record
from app.dependencies import get_current_identity
from app.models.lawyer import Lawyer
from app.models.user import RequestIdentity
from app.services.dashboard_service import (
    LawyerDashboard,
    UserDashboard,
    dashboard_service,
)

router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])


@router.get("/user", response_model=UserDashboard)
async def user_dashboard(identity: RequestIdentity = Depends(get_current_identity)):
    return await dashboard_service.user_dashboard(identity.uid)


@router.get("/lawyer", response_model=LawyerDashboard)
async def lawyer_dashboard(lawyer: Lawyer = Depends(require_lawyer_record)):
    return await dashboard_service.lawyer_dashboard(lawyer)
