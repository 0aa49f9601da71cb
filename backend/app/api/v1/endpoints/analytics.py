"""
Analytics API endpoints.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.controllers.analytics_controller import AnalyticsController
from app.schemas.analytics import AnalyticsResponse, DashboardResponse

router = APIRouter()


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    db: AsyncSession = Depends(get_db),
) -> DashboardResponse:
    """Dashboard summary."""
    controller = AnalyticsController(db)
    return await controller.get_dashboard()


@router.get("", response_model=AnalyticsResponse)
async def get_analytics(
    time_range: int = Query(12, ge=1, le=120, alias="timeRange"),
    db: AsyncSession = Depends(get_db),
) -> AnalyticsResponse:
    """Analytics over the last ``timeRange`` months."""
    controller = AnalyticsController(db)
    return await controller.get_analytics(time_range_months=time_range)
