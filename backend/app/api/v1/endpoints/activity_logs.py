"""
Activity log API endpoints.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.middleware import require_authentication
from app.db.session import get_db
from app.controllers.activity_log_controller import ActivityLogController
from app.models.user import User
from app.schemas.activity_log import ActivityLogListResponse

router = APIRouter()


@router.get("", response_model=ActivityLogListResponse)
async def list_activity_logs(
    limit: int = Query(50, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_authentication),
) -> ActivityLogListResponse:
    """The current user's latest actions."""
    controller = ActivityLogController(db)
    return await controller.list_for_user(current_user, limit=limit)
