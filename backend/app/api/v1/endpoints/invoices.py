"""
Invoice API endpoints, including the payments of an invoice.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, HTTPException, status
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.api.v1.middleware import require_admin, require_authentication
from app.db.session import get_db
from app.controllers.invoice_controller import InvoiceController
from app.models.invoice import PaymentStatus
from app.models.user import User
from app.schemas.invoice import InvoiceDetailResponse, InvoiceListResponse, OverdueRefreshResponse
from app.schemas.payment import PaymentCreate, PaymentListResponse, PaymentRecordResponse

router = APIRouter()


@router.get("", response_model=InvoiceListResponse)
async def list_invoices(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    payment_status: Optional[PaymentStatus] = Query(None),
    db: AsyncSession = Depends(get_db),
) -> InvoiceListResponse:
    """List invoices, newest first."""
    controller = InvoiceController(db)
    return await controller.list_invoices(skip=skip, limit=limit, payment_status=payment_status)


@router.post("/refresh-overdue", response_model=OverdueRefreshResponse)
async def refresh_overdue(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> OverdueRefreshResponse:
    """Mark unpaid invoices past their due date as overdue."""
    controller = InvoiceController(db)
    return await controller.refresh_overdue()


@router.get("/{invoice_id}", response_model=InvoiceDetailResponse)
async def get_invoice(
    invoice_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> InvoiceDetailResponse:
    """Get invoice with quote, client, items and payments."""
    controller = InvoiceController(db)
    invoice = await controller.get_invoice(invoice_id)
    if not invoice:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Invoice not found",
        )
    return invoice


@router.get("/{invoice_id}/pdf")
async def export_invoice_pdf(
    invoice_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Download the invoice as a PDF."""
    controller = InvoiceController(db)
    filename, output = await controller.export_pdf(invoice_id)
    return StreamingResponse(
        output,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.get("/{invoice_id}/payments", response_model=PaymentListResponse)
async def list_payments(
    invoice_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> PaymentListResponse:
    """Payments of an invoice, newest first."""
    controller = InvoiceController(db)
    return await controller.list_payments(invoice_id)


@router.post(
    "/{invoice_id}/payments",
    response_model=PaymentRecordResponse,
    status_code=status.HTTP_201_CREATED,
)
async def record_payment(
    invoice_id: UUID,
    payment_data: PaymentCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_authentication),
) -> PaymentRecordResponse:
    """Record a payment and reconcile the invoice."""
    controller = InvoiceController(db)
    return await controller.record_payment(invoice_id, payment_data, current_user)
