"""
Payment reconciliation: payment entries, paid amount and invoice status.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError, ValidationError
from app.db.repositories.invoice_repository import InvoiceRepository
from app.db.repositories.payment_history_repository import PaymentHistoryRepository
from app.models.invoice import Invoice, PaymentMethod, PaymentStatus
from app.schemas.payment import PaymentCreate, PaymentRecordResponse, PaymentResponse
from app.services.base_service import BaseService
from app.utils.dates import utcnow
from app.utils.money import MAX_MONEY, bounded_money, to_money

logger = logging.getLogger(__name__)


def derive_payment_status(
    paid_amount: Decimal,
    total: Decimal,
    due_date: datetime,
    now: datetime,
) -> PaymentStatus:
    """
    Status of an invoice from what has been paid and when it is due.

    paid >= total wins over the due date, so a settled invoice is never
    overdue. An unpaid or partly paid invoice past its due date is overdue.
    """
    paid_amount = to_money(paid_amount)
    if paid_amount >= to_money(total):
        return PaymentStatus.PAID
    if now > due_date:
        return PaymentStatus.OVERDUE
    if paid_amount > 0:
        return PaymentStatus.PARTIAL
    return PaymentStatus.PENDING


def parse_payment_method(value) -> PaymentMethod:
    try:
        return PaymentMethod(value)
    except ValueError as e:
        raise ValidationError(
            f"Unknown payment method: {value}",
            details={"allowed": [method.value for method in PaymentMethod]},
        ) from e


class PaymentService(BaseService):
    """Service for recording and reconciling invoice payments."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.invoice_repo = InvoiceRepository(session)
        self.payment_repo = PaymentHistoryRepository(session)

    async def record_payment(
        self,
        invoice_id: UUID,
        payment_data: PaymentCreate,
        recorded_by: UUID,
    ) -> PaymentRecordResponse:
        """
        Append a payment entry and reconcile the invoice in one transaction.

        Over-payment is accepted; the response carries a warning instead.

        Raises:
            ValidationError: amount <= 0 or too large, or unknown payment method
            NotFoundError: unknown invoice
        """
        amount = bounded_money(payment_data.amount, "amount")
        if amount <= 0:
            raise ValidationError("Payment amount must be positive", details={"amount": str(amount)})
        method = parse_payment_method(payment_data.payment_method)

        invoice = await self.invoice_repo.get_for_update(invoice_id)
        if not invoice:
            raise NotFoundError("Invoice not found", details={"invoice_id": str(invoice_id)})

        already_paid = await self.payment_repo.sum_by_invoice(invoice_id)
        if already_paid + amount > MAX_MONEY:
            raise ValidationError(
                f"Total payments on an invoice must not exceed {MAX_MONEY}",
                details={"paid_amount": str(already_paid), "amount": str(amount)},
            )

        payment = await self.payment_repo.create(
            invoice_id=invoice_id,
            amount=amount,
            payment_method=method,
            payment_date=payment_data.payment_date or utcnow(),
            transaction_id=payment_data.transaction_id,
            notes=payment_data.notes,
            recorded_by=recorded_by,
        )
        paid_amount, payment_status = await self._reconcile(invoice)
        await self.session.commit()

        total = to_money(invoice.quote.total)
        warning = None
        if paid_amount > total:
            warning = f"Invoice {invoice.invoice_number} is overpaid by {paid_amount - total}"
            logger.warning(
                warning,
                extra={"invoice_id": str(invoice_id), "paid_amount": str(paid_amount), "total": str(total)},
            )

        logger.info(
            f"Recorded payment of {amount} on invoice {invoice.invoice_number}",
            extra={"invoice_id": str(invoice_id), "payment_status": payment_status.value},
        )
        return PaymentRecordResponse(
            **PaymentResponse.model_validate(payment).model_dump(),
            invoice_paid_amount=paid_amount,
            invoice_payment_status=payment_status,
            warning=warning,
        )

    async def delete_payment(self, payment_id: UUID) -> bool:
        """Remove a payment entry and reconcile its invoice. False if unknown."""
        payment = await self.payment_repo.get(payment_id)
        if not payment:
            return False
        invoice_id = payment.invoice_id

        invoice = await self.invoice_repo.get_for_update(invoice_id)
        await self.payment_repo.delete(payment_id)
        paid_amount, payment_status = await self._reconcile(invoice)
        await self.session.commit()

        logger.info(
            f"Deleted payment {payment_id} from invoice {invoice.invoice_number}",
            extra={
                "invoice_id": str(invoice_id),
                "paid_amount": str(paid_amount),
                "payment_status": payment_status.value,
            },
        )
        return True

    async def get_payment(self, payment_id: UUID) -> Optional[PaymentResponse]:
        payment = await self.payment_repo.get(payment_id)
        if not payment:
            return None
        return PaymentResponse.model_validate(payment)

    async def list_payments(self, invoice_id: UUID) -> List[PaymentResponse]:
        """Payments of an invoice, newest payment date first."""
        if not await self.invoice_repo.get(invoice_id):
            raise NotFoundError("Invoice not found", details={"invoice_id": str(invoice_id)})
        payments = await self.payment_repo.list_by_invoice(invoice_id)
        return [PaymentResponse.model_validate(payment) for payment in payments]

    async def refresh_overdue_invoices(self, now: Optional[datetime] = None) -> int:
        """
        Re-derive the status of every unpaid invoice past its due date.

        Returns:
            Number of invoices whose status changed
        """
        now = now or utcnow()
        invoices = await self.invoice_repo.list_past_due_unpaid(now)
        updated = 0
        for invoice in invoices:
            status = derive_payment_status(invoice.paid_amount, invoice.quote.total, invoice.due_date, now)
            if status != invoice.payment_status:
                await self.invoice_repo.update(invoice.id, payment_status=status)
                updated += 1
        await self.session.commit()

        logger.info(
            f"Overdue sweep updated {updated} invoice(s)",
            extra={"checked": len(invoices), "updated": updated},
        )
        return updated

    async def _reconcile(self, invoice: Invoice, now: Optional[datetime] = None) -> Tuple[Decimal, PaymentStatus]:
        """Recompute paid_amount from the entries and re-derive the status."""
        paid_amount = await self.payment_repo.sum_by_invoice(invoice.id)
        payment_status = derive_payment_status(
            paid_amount,
            invoice.quote.total,
            invoice.due_date,
            now or utcnow(),
        )
        await self.invoice_repo.update(invoice.id, paid_amount=paid_amount, payment_status=payment_status)
        return paid_amount, payment_status
