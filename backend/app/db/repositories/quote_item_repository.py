"""
Quote item repository for database operations.
"""

from typing import List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete

from app.db.repositories.base_repository import BaseRepository
from app.models.quote import QuoteItem


class QuoteItemRepository(BaseRepository[QuoteItem]):
    """Repository for quote line items."""

    def __init__(self, session: AsyncSession):
        super().__init__(QuoteItem, session)

    async def list_by_quote(self, quote_id: UUID) -> List[QuoteItem]:
        """List items for a quote in render order."""
        result = await self.session.execute(
            select(QuoteItem)
            .where(QuoteItem.quote_id == quote_id)
            .order_by(QuoteItem.sort_order, QuoteItem.line_number)
        )
        return list(result.scalars().all())

    async def create_many(self, quote_id: UUID, items: List[dict]) -> List[QuoteItem]:
        """Insert items for a quote in one flush."""
        instances = [QuoteItem(quote_id=quote_id, **item) for item in items]
        self.session.add_all(instances)
        await self.session.flush()
        return instances

    async def delete_by_quote(self, quote_id: UUID) -> int:
        """Delete all items for a quote."""
        result = await self.session.execute(
            delete(QuoteItem).where(QuoteItem.quote_id == quote_id)
        )
        await self.session.flush()
        return result.rowcount
