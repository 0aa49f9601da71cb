"""
Settings controller.
"""

from typing import Dict
from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.base_controller import BaseController
from app.models.user import User
from app.services.activity_log_service import ActivityLogService
from app.services.setting_service import SettingService
from app.schemas.setting import SettingsUpdateResponse


class SettingController(BaseController):
    """Controller for settings operations."""

    def __init__(self, session: AsyncSession):
        self.setting_service = SettingService(session)
        self.activity_log_service = ActivityLogService(session)

    async def get_settings(self) -> Dict[str, str]:
        return await self.setting_service.get_all()

    async def update_settings(self, values: Dict[str, str], current_user: User) -> SettingsUpdateResponse:
        """Upsert settings and record the change."""
        updated = await self.setting_service.upsert_many(values, updated_by=current_user.id)
        await self.activity_log_service.log(current_user.id, "update_settings", "settings")
        return SettingsUpdateResponse(success=True, settings=updated)
