"""
Quote controller.
Coordinates quote lifecycle, conversion and the activity log.
"""

import io
from typing import Optional, Tuple
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.base_controller import BaseController
from app.models.quote import QuoteStatus
from app.models.user import User
from app.services.activity_log_service import ActivityLogService
from app.services.conversion_service import ConversionService
from app.services.pdf_service import PdfService
from app.services.quote_service import QuoteService
from app.schemas.invoice import InvoiceDetailResponse
from app.schemas.quote import QuoteCreate, QuoteUpdate, QuoteDetailResponse, QuoteListResponse


class QuoteController(BaseController):
    """Controller for quote operations."""

    def __init__(self, session: AsyncSession):
        self.quote_service = QuoteService(session)
        self.conversion_service = ConversionService(session)
        self.pdf_service = PdfService(session)
        self.activity_log_service = ActivityLogService(session)

    async def create_quote(self, quote_data: QuoteCreate, current_user: User) -> QuoteDetailResponse:
        """Create a new quote."""
        quote = await self.quote_service.create_quote(quote_data, created_by=current_user.id)
        await self.activity_log_service.log(current_user.id, "create_quote", "quote", quote.id)
        return quote

    async def get_quote_detail(self, quote_id: UUID) -> Optional[QuoteDetailResponse]:
        """Get quote with client and items."""
        return await self.quote_service.get_quote_detail(quote_id)

    async def list_quotes(
        self,
        skip: int = 0,
        limit: int = 100,
        status: Optional[QuoteStatus] = None,
        client_id: Optional[UUID] = None,
    ) -> QuoteListResponse:
        """List quotes with optional filters."""
        quotes, total = await self.quote_service.list_quotes(
            skip=skip,
            limit=limit,
            status=status,
            client_id=client_id,
        )
        return QuoteListResponse(items=quotes, total=total)

    async def update_quote(
        self,
        quote_id: UUID,
        quote_data: QuoteUpdate,
        current_user: User,
    ) -> QuoteDetailResponse:
        """Update a quote."""
        quote = await self.quote_service.update_quote(quote_id, quote_data)
        await self.activity_log_service.log(current_user.id, "update_quote", "quote", quote_id)
        return quote

    async def delete_quote(self, quote_id: UUID, current_user: User) -> bool:
        """Delete a quote."""
        deleted = await self.quote_service.delete_quote(quote_id)
        if deleted:
            await self.activity_log_service.log(current_user.id, "delete_quote", "quote", quote_id)
        return deleted

    async def convert_to_invoice(self, quote_id: UUID, current_user: User) -> InvoiceDetailResponse:
        """Convert a quote to its invoice."""
        invoice = await self.conversion_service.convert_to_invoice(quote_id)
        await self.activity_log_service.log(current_user.id, "convert_to_invoice", "invoice", invoice.id)
        return invoice

    async def export_pdf(self, quote_id: UUID) -> Tuple[str, io.BytesIO]:
        """Quote as a PDF document: (file name, content)."""
        return await self.pdf_service.render_quote(quote_id)
