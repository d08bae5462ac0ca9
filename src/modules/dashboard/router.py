"""Dashboard API router."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.session import get_db
from src.modules.auth.dependencies import AuthenticatedUser, get_current_user
from src.modules.dashboard.schemas import DashboardCounts
from src.modules.dashboard.service import DashboardService

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/counts", response_model=DashboardCounts, response_model_by_alias=True)
async def dashboard_counts(
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Shipment and order counters for the dashboard."""
    svc = DashboardService(db)
    return await svc.dashboard_counts()
