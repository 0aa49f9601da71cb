"""
Activity log repository for database operations.
"""

from typing import List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.db.repositories.base_repository import BaseRepository
from app.models.activity_log import ActivityLog


class ActivityLogRepository(BaseRepository[ActivityLog]):
    """Repository for the audit trail."""

    def __init__(self, session: AsyncSession):
        super().__init__(ActivityLog, session)

    async def list_by_user(self, user_id: UUID, limit: int = 50) -> List[ActivityLog]:
        """Latest actions of a user."""
        result = await self.session.execute(
            select(ActivityLog)
            .where(ActivityLog.user_id == user_id)
            .order_by(ActivityLog.timestamp.desc())
            .limit(limit)
        )
        return list(result.scalars().all())
