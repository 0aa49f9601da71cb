"""
Quote to invoice conversion.
"""

import logging
from datetime import timedelta
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.db.repositories.invoice_repository import InvoiceRepository
from app.db.repositories.quote_repository import QuoteRepository
from app.models.document_sequence import DocumentSeries
from app.models.invoice import PaymentStatus
from app.models.quote import QuoteStatus
from app.schemas.invoice import InvoiceDetailResponse
from app.services.base_service import BaseService
from app.services.invoice_service import InvoiceService
from app.services.numbering_service import NumberingService
from app.services.setting_service import SettingService
from app.utils.dates import utcnow
from app.utils.money import ZERO

logger = logging.getLogger(__name__)


class ConversionService(BaseService):
    """Turns a quote into its single invoice."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.quote_repo = QuoteRepository(session)
        self.invoice_repo = InvoiceRepository(session)
        self.numbering_service = NumberingService(session)
        self.setting_service = SettingService(session)
        self.invoice_service = InvoiceService(session)

    async def convert_to_invoice(self, quote_id: UUID) -> InvoiceDetailResponse:
        """
        Create the invoice for a quote and mark the quote invoiced.

        The quote row is locked for the duration of the transaction; the
        unique constraint on invoices.quote_id catches a concurrent
        conversion that got past the check.

        Raises:
            NotFoundError: unknown quote
            ConflictError: the quote already has an invoice
            ValidationError: the quote was rejected
        """
        quote = await self.quote_repo.get_for_update(quote_id)
        if not quote:
            raise NotFoundError("Quote not found", details={"quote_id": str(quote_id)})

        existing = await self.invoice_repo.get_by_quote(quote_id)
        if existing or quote.status == QuoteStatus.INVOICED:
            raise ConflictError(
                "Quote already converted to invoice",
                details={
                    "quote_id": str(quote_id),
                    "invoice_number": existing.invoice_number if existing else None,
                },
            )
        if quote.status == QuoteStatus.REJECTED:
            raise ValidationError(
                "Rejected quotes cannot be converted to an invoice",
                details={"quote_id": str(quote_id), "status": quote.status.value},
            )

        quote_number = quote.quote_number
        now = utcnow()
        try:
            prefix = await self.setting_service.get_invoice_prefix()
            invoice_number = await self.numbering_service.issue_number(DocumentSeries.INVOICE, prefix)
            invoice = await self.invoice_repo.create(
                invoice_number=invoice_number,
                quote_id=quote_id,
                payment_status=PaymentStatus.PENDING,
                due_date=now + timedelta(days=settings.INVOICE_DUE_DAYS),
                paid_amount=ZERO,
            )
            await self.quote_repo.update(quote_id, status=QuoteStatus.INVOICED)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning(
                f"Conversion of quote {quote_number} lost a race: {e.orig}",
                extra={"quote_id": str(quote_id)},
            )
            raise ConflictError(
                "Quote already converted to invoice",
                details={"quote_id": str(quote_id)},
            ) from e

        logger.info(
            f"Converted quote {quote_number} to invoice {invoice_number}",
            extra={"quote_id": str(quote_id), "invoice_id": str(invoice.id)},
        )
        return self.invoice_service.to_detail_response(await self.invoice_repo.get(invoice.id))
