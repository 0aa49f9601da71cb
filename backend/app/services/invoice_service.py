"""
Invoice service for the read side of invoices.
"""

import logging
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.repositories.invoice_repository import InvoiceRepository
from app.models.invoice import Invoice, PaymentStatus
from app.schemas.invoice import InvoiceDetailResponse, InvoiceResponse
from app.schemas.payment import PaymentResponse
from app.schemas.quote import QuoteDetailResponse
from app.services.base_service import BaseService
from app.utils.money import to_money

logger = logging.getLogger(__name__)


class InvoiceService(BaseService):
    """Service for invoice listing and detail."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.invoice_repo = InvoiceRepository(session)

    async def get_invoice(self, invoice_id: UUID) -> Optional[InvoiceDetailResponse]:
        """Invoice with quote, client, items and payments."""
        invoice = await self.invoice_repo.get(invoice_id)
        if not invoice:
            return None
        return self.to_detail_response(invoice)

    async def list_invoices(
        self,
        skip: int = 0,
        limit: int = 100,
        payment_status: Optional[PaymentStatus] = None,
    ) -> Tuple[List[InvoiceResponse], int]:
        """List invoices, newest first."""
        invoices = await self.invoice_repo.list(skip=skip, limit=limit, payment_status=payment_status)
        total = await self.invoice_repo.count(payment_status=payment_status)
        return [self.to_response(invoice) for invoice in invoices], total

    def to_response(self, invoice: Invoice) -> InvoiceResponse:
        response = InvoiceResponse.model_validate(invoice)
        self._fill_quote_figures(response, invoice)
        return response

    def to_detail_response(self, invoice: Invoice) -> InvoiceDetailResponse:
        quote = QuoteDetailResponse.model_validate(invoice.quote)
        quote.client_name = invoice.quote.client.name if invoice.quote.client else None
        response = InvoiceDetailResponse(
            **InvoiceResponse.model_validate(invoice).model_dump(),
            quote=quote,
            payments=[PaymentResponse.model_validate(payment) for payment in invoice.payments],
        )
        self._fill_quote_figures(response, invoice)
        return response

    @staticmethod
    def _fill_quote_figures(response: InvoiceResponse, invoice: Invoice) -> None:
        quote = invoice.quote
        if quote is None:
            return
        response.quote_number = quote.quote_number
        response.client_name = quote.client.name if quote.client else None
        response.total = to_money(quote.total)
        response.balance_due = to_money(quote.total) - to_money(invoice.paid_amount)
