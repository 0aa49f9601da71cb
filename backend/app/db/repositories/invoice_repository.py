"""
Invoice repository for database operations.
"""

from datetime import datetime
from typing import Optional, List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from app.db.repositories.base_repository import BaseRepository
from app.models.invoice import Invoice, PaymentStatus
from app.models.quote import Quote


class InvoiceRepository(BaseRepository[Invoice]):
    """Repository for invoice operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Invoice, session)

    def _base_query(self):
        """Invoice with its quote, the quote's client and items, and payments."""
        return (
            select(Invoice)
            .options(
                selectinload(Invoice.quote).selectinload(Quote.client),
                selectinload(Invoice.quote).selectinload(Quote.items),
                selectinload(Invoice.payments),
            )
            .execution_options(populate_existing=True)
        )

    async def get(self, id: UUID) -> Optional[Invoice]:
        """Get invoice by ID with relationships loaded."""
        result = await self.session.execute(self._base_query().where(Invoice.id == id))
        return result.scalar_one_or_none()

    async def get_for_update(self, id: UUID) -> Optional[Invoice]:
        """Get invoice by ID holding a row lock until the transaction ends."""
        result = await self.session.execute(
            self._base_query().where(Invoice.id == id).with_for_update(of=Invoice)
        )
        return result.scalar_one_or_none()

    async def get_by_quote(self, quote_id: UUID) -> Optional[Invoice]:
        """Get the invoice converted from a quote, if any."""
        result = await self.session.execute(
            self._base_query().where(Invoice.quote_id == quote_id)
        )
        return result.scalar_one_or_none()

    async def list(
        self,
        skip: int = 0,
        limit: int = 100,
        **filters,
    ) -> List[Invoice]:
        """List invoices, newest first."""
        query = self._apply_filters(self._base_query(), filters)
        query = query.order_by(Invoice.created_at.desc()).offset(skip).limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_past_due_unpaid(self, now: datetime) -> List[Invoice]:
        """Invoices not fully paid whose due date has passed, locked for the sweep."""
        result = await self.session.execute(
            self._base_query()
            .where(
                Invoice.due_date < now,
                Invoice.payment_status != PaymentStatus.PAID,
            )
            .with_for_update(of=Invoice)
        )
        return list(result.scalars().all())
