"""
Activity log service: audit trail of user actions.
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.repositories.activity_log_repository import ActivityLogRepository
from app.schemas.activity_log import ActivityLogResponse
from app.services.base_service import BaseService


class ActivityLogService(BaseService):
    """Service for activity log operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.activity_log_repo = ActivityLogRepository(session)

    async def log(
        self,
        user_id: UUID,
        action: str,
        entity_type: str,
        entity_id: Optional[UUID] = None,
    ) -> ActivityLogResponse:
        """Record an action that has already been committed."""
        entry = await self.activity_log_repo.create(
            user_id=user_id,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
        )
        await self.session.commit()
        return ActivityLogResponse.model_validate(entry)

    async def list_for_user(self, user_id: UUID, limit: int = 50) -> List[ActivityLogResponse]:
        entries = await self.activity_log_repo.list_by_user(user_id, limit=limit)
        return [ActivityLogResponse.model_validate(entry) for entry in entries]
