"""
Payment history repository for database operations.
"""

from decimal import Decimal
from typing import List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from app.db.repositories.base_repository import BaseRepository
from app.models.invoice import PaymentHistory
from app.utils.money import to_money


class PaymentHistoryRepository(BaseRepository[PaymentHistory]):
    """Repository for invoice payment entries."""

    def __init__(self, session: AsyncSession):
        super().__init__(PaymentHistory, session)

    async def list_by_invoice(self, invoice_id: UUID) -> List[PaymentHistory]:
        """Payments for an invoice, most recent payment date first."""
        result = await self.session.execute(
            select(PaymentHistory)
            .where(PaymentHistory.invoice_id == invoice_id)
            .order_by(PaymentHistory.payment_date.desc(), PaymentHistory.created_at.desc())
        )
        return list(result.scalars().all())

    async def sum_by_invoice(self, invoice_id: UUID) -> Decimal:
        """Total of all payment entries for an invoice."""
        result = await self.session.execute(
            select(func.coalesce(func.sum(PaymentHistory.amount), 0))
            .where(PaymentHistory.invoice_id == invoice_id)
        )
        return to_money(result.scalar_one())
