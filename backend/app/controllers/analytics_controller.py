"""
Analytics controller.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.base_controller import BaseController
from app.services.analytics_service import AnalyticsService
from app.schemas.analytics import AnalyticsResponse, DashboardResponse


class AnalyticsController(BaseController):
    """Controller for dashboard and analytics."""

    def __init__(self, session: AsyncSession):
        self.analytics_service = AnalyticsService(session)

    async def get_dashboard(self) -> DashboardResponse:
        return await self.analytics_service.get_dashboard()

    async def get_analytics(self, time_range_months: int = 12) -> AnalyticsResponse:
        return await self.analytics_service.get_analytics(time_range_months=time_range_months)
