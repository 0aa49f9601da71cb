"""
Settings API endpoints.
"""

from typing import Dict
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.middleware import require_admin
from app.db.session import get_db
from app.controllers.setting_controller import SettingController
from app.models.user import User
from app.schemas.setting import SettingsUpdateResponse

router = APIRouter()


@router.get("", response_model=Dict[str, str])
async def get_settings(
    db: AsyncSession = Depends(get_db),
) -> Dict[str, str]:
    """All settings as a key/value map."""
    controller = SettingController(db)
    return await controller.get_settings()


@router.put("", response_model=SettingsUpdateResponse)
async def update_settings(
    values: Dict[str, str],
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> SettingsUpdateResponse:
    """Insert or update settings (admin only)."""
    controller = SettingController(db)
    return await controller.update_settings(values, current_user)
