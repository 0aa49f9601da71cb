"""
Setting service: key/value settings such as numbering prefixes.
"""

from typing import Dict, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings as app_settings
from app.core.exceptions import ValidationError
from app.db.repositories.setting_repository import SettingRepository
from app.services.base_service import BaseService

QUOTE_PREFIX_KEY = "quotePrefix"
INVOICE_PREFIX_KEY = "invoicePrefix"


class SettingService(BaseService):
    """Service for settings operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.setting_repo = SettingRepository(session)

    async def get_all(self) -> Dict[str, str]:
        """All settings as a key -> value map."""
        return {s.key: s.value for s in await self.setting_repo.list_all()}

    async def get_value(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Value of a setting, or ``default`` when unset or blank."""
        setting = await self.setting_repo.get_by_key(key)
        if setting is None or not setting.value:
            return default
        return setting.value

    async def get_quote_prefix(self) -> str:
        return await self.get_value(QUOTE_PREFIX_KEY, app_settings.DEFAULT_QUOTE_PREFIX)

    async def get_invoice_prefix(self) -> str:
        return await self.get_value(INVOICE_PREFIX_KEY, app_settings.DEFAULT_INVOICE_PREFIX)

    async def upsert_many(self, values: Dict[str, str], updated_by: Optional[UUID] = None) -> Dict[str, str]:
        """Insert or update several settings in one transaction."""
        for key, value in values.items():
            if not key:
                raise ValidationError("Setting key must not be empty")
            if key in (QUOTE_PREFIX_KEY, INVOICE_PREFIX_KEY) and not str(value).strip():
                raise ValidationError(f"{key} must not be blank")
            await self.setting_repo.upsert(key, str(value), updated_by)
        await self.session.commit()
        return await self.get_all()
