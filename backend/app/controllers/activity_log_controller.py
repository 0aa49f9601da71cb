"""
Activity log controller.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.base_controller import BaseController
from app.models.user import User
from app.services.activity_log_service import ActivityLogService
from app.schemas.activity_log import ActivityLogListResponse


class ActivityLogController(BaseController):
    """Controller for the current user's activity log."""

    def __init__(self, session: AsyncSession):
        self.activity_log_service = ActivityLogService(session)

    async def list_for_user(self, current_user: User, limit: int = 50) -> ActivityLogListResponse:
        entries = await self.activity_log_service.list_for_user(current_user.id, limit=limit)
        return ActivityLogListResponse(items=entries, total=len(entries))
