"""
Invoice controller.
Invoice reads, payments and the overdue sweep.
"""

import io
from typing import Optional, Tuple
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.base_controller import BaseController
from app.models.invoice import PaymentStatus
from app.models.user import User
from app.services.activity_log_service import ActivityLogService
from app.services.invoice_service import InvoiceService
from app.services.payment_service import PaymentService
from app.services.pdf_service import PdfService
from app.schemas.invoice import InvoiceDetailResponse, InvoiceListResponse, OverdueRefreshResponse
from app.schemas.payment import PaymentCreate, PaymentListResponse, PaymentRecordResponse


class InvoiceController(BaseController):
    """Controller for invoice and payment operations."""

    def __init__(self, session: AsyncSession):
        self.invoice_service = InvoiceService(session)
        self.payment_service = PaymentService(session)
        self.pdf_service = PdfService(session)
        self.activity_log_service = ActivityLogService(session)

    async def get_invoice(self, invoice_id: UUID) -> Optional[InvoiceDetailResponse]:
        """Get invoice with quote, items and payments."""
        return await self.invoice_service.get_invoice(invoice_id)

    async def export_pdf(self, invoice_id: UUID) -> Tuple[str, io.BytesIO]:
        """Invoice as a PDF document: (file name, content)."""
        return await self.pdf_service.render_invoice(invoice_id)

    async def list_invoices(
        self,
        skip: int = 0,
        limit: int = 100,
        payment_status: Optional[PaymentStatus] = None,
    ) -> InvoiceListResponse:
        """List invoices, newest first."""
        invoices, total = await self.invoice_service.list_invoices(
            skip=skip,
            limit=limit,
            payment_status=payment_status,
        )
        return InvoiceListResponse(items=invoices, total=total)

    async def list_payments(self, invoice_id: UUID) -> PaymentListResponse:
        """Payments of an invoice."""
        payments = await self.payment_service.list_payments(invoice_id)
        return PaymentListResponse(items=payments, total=len(payments))

    async def record_payment(
        self,
        invoice_id: UUID,
        payment_data: PaymentCreate,
        current_user: User,
    ) -> PaymentRecordResponse:
        """Record a payment against an invoice."""
        payment = await self.payment_service.record_payment(invoice_id, payment_data, recorded_by=current_user.id)
        await self.activity_log_service.log(current_user.id, "record_payment", "payment", payment.id)
        return payment

    async def delete_payment(self, payment_id: UUID, current_user: User) -> bool:
        """Delete a payment entry."""
        deleted = await self.payment_service.delete_payment(payment_id)
        if deleted:
            await self.activity_log_service.log(current_user.id, "delete_payment", "payment", payment_id)
        return deleted

    async def refresh_overdue(self) -> OverdueRefreshResponse:
        """Run the overdue sweep."""
        updated = await self.payment_service.refresh_overdue_invoices()
        return OverdueRefreshResponse(updated=updated)
