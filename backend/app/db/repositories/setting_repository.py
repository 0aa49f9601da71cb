"""
Setting repository for database operations.
"""

from typing import Optional, List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.db.repositories.base_repository import BaseRepository
from app.models.setting import Setting


class SettingRepository(BaseRepository[Setting]):
    """Repository for key/value settings."""

    def __init__(self, session: AsyncSession):
        super().__init__(Setting, session)

    async def get_by_key(self, key: str) -> Optional[Setting]:
        """Get a setting by key."""
        result = await self.session.execute(select(Setting).where(Setting.key == key))
        return result.scalar_one_or_none()

    async def list_all(self) -> List[Setting]:
        """All settings ordered by key."""
        result = await self.session.execute(select(Setting).order_by(Setting.key))
        return list(result.scalars().all())

    async def upsert(self, key: str, value: str, updated_by: Optional[UUID] = None) -> Setting:
        """Insert or update a setting by key."""
        setting = await self.get_by_key(key)
        if setting is None:
            return await self.create(key=key, value=value, updated_by=updated_by)
        setting.value = value
        setting.updated_by = updated_by
        await self.session.flush()
        return setting
