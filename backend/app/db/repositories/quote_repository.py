"""
Quote repository for database operations.
"""

from typing import Optional, List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func
from sqlalchemy.orm import selectinload

from app.db.repositories.base_repository import BaseRepository
from app.models.quote import Quote, QuoteItem


class QuoteRepository(BaseRepository[Quote]):
    """Repository for quote operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Quote, session)

    def _base_query(self):
        """Base query with eager loading of client and items."""
        return (
            select(Quote)
            .options(
                selectinload(Quote.client),
                selectinload(Quote.items),
            )
            .execution_options(populate_existing=True)
        )

    async def get(self, id: UUID) -> Optional[Quote]:
        """Get quote by ID with client and items loaded."""
        result = await self.session.execute(self._base_query().where(Quote.id == id))
        return result.scalar_one_or_none()

    async def get_for_update(self, id: UUID) -> Optional[Quote]:
        """Get quote by ID holding a row lock until the transaction ends."""
        result = await self.session.execute(
            self._base_query().where(Quote.id == id).with_for_update(of=Quote)
        )
        return result.scalar_one_or_none()

    async def list(
        self,
        skip: int = 0,
        limit: int = 100,
        **filters,
    ) -> List[Quote]:
        """List quotes with pagination and filters, newest first."""
        query = self._apply_filters(self._base_query(), filters)
        query = query.order_by(Quote.created_at.desc()).offset(skip).limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_all(self) -> List[Quote]:
        """All quotes with clients, newest first (analytics)."""
        result = await self.session.execute(
            select(Quote)
            .options(selectinload(Quote.client))
            .order_by(Quote.created_at.desc())
        )
        return list(result.scalars().all())

    async def count_by_client(self, client_id: UUID) -> int:
        """Number of quotes referencing a client."""
        result = await self.session.execute(
            select(func.count(Quote.id)).where(Quote.client_id == client_id)
        )
        return result.scalar_one()

    async def delete_with_items(self, quote_id: UUID) -> bool:
        """Delete the quote's items, then the quote itself."""
        await self.session.execute(delete(QuoteItem).where(QuoteItem.quote_id == quote_id))
        result = await self.session.execute(delete(Quote).where(Quote.id == quote_id))
        await self.session.flush()
        return result.rowcount > 0
