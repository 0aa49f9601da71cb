"""
Quote service: quote creation, totals, status transitions and line items.
"""

import logging
from decimal import Decimal
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.db.repositories.client_repository import ClientRepository
from app.db.repositories.invoice_repository import InvoiceRepository
from app.db.repositories.quote_item_repository import QuoteItemRepository
from app.db.repositories.quote_repository import QuoteRepository
from app.models.document_sequence import DocumentSeries
from app.models.quote import Quote, QuoteStatus
from app.schemas.quote import QuoteCreate, QuoteDetailResponse, QuoteItemCreate, QuoteResponse, QuoteUpdate
from app.services.base_service import BaseService
from app.services.numbering_service import NumberingService
from app.services.setting_service import SettingService
from app.utils.money import MAX_MONEY, ZERO, bounded_money, to_money

logger = logging.getLogger(__name__)

MONEY_FIELDS = ("discount", "cgst", "sgst", "igst", "shipping_charges")

# approved -> invoiced happens only through conversion
ALLOWED_TRANSITIONS: Dict[QuoteStatus, Tuple[QuoteStatus, ...]] = {
    QuoteStatus.DRAFT: (QuoteStatus.SENT,),
    QuoteStatus.SENT: (QuoteStatus.APPROVED, QuoteStatus.REJECTED),
    QuoteStatus.APPROVED: (),
    QuoteStatus.REJECTED: (),
    QuoteStatus.INVOICED: (),
}

EDITABLE_STATUSES = (QuoteStatus.DRAFT, QuoteStatus.SENT)

# quote_items.quantity is a 32-bit INTEGER column
MAX_QUANTITY = 2_147_483_647


class QuoteTotals(NamedTuple):
    subtotal: Decimal
    total: Decimal


def compute_item_subtotal(quantity: int, unit_price) -> Decimal:
    """quantity * unit_price at cent precision."""
    return to_money(Decimal(quantity) * to_money(unit_price))


def compute_quote_totals(
    items: Iterable[Tuple[int, Decimal]],
    discount=ZERO,
    cgst=ZERO,
    sgst=ZERO,
    igst=ZERO,
    shipping_charges=ZERO,
) -> QuoteTotals:
    """
    subtotal = sum(quantity * unit_price);
    total = subtotal - discount + cgst + sgst + igst + shipping_charges.

    Args:
        items: (quantity, unit_price) pairs

    Raises:
        ValidationError: a negative or oversized adjustment, or a total
            outside 0..MAX_MONEY
    """
    adjustments = {
        "discount": discount,
        "cgst": cgst,
        "sgst": sgst,
        "igst": igst,
        "shipping_charges": shipping_charges,
    }
    amounts = {}
    for name, value in adjustments.items():
        amount = bounded_money(value, name)
        if amount < 0:
            raise ValidationError(f"{name} must not be negative", details={name: str(amount)})
        amounts[name] = amount

    subtotal = sum((compute_item_subtotal(qty, price) for qty, price in items), ZERO)
    total = (
        subtotal
        - amounts["discount"]
        + amounts["cgst"]
        + amounts["sgst"]
        + amounts["igst"]
        + amounts["shipping_charges"]
    )
    if total < 0:
        raise ValidationError(
            "Quote total must not be negative",
            details={"subtotal": str(subtotal), "discount": str(amounts["discount"])},
        )
    if subtotal > MAX_MONEY or total > MAX_MONEY:
        raise ValidationError(
            f"Quote amounts must not exceed {MAX_MONEY}",
            details={"subtotal": str(subtotal), "total": str(total), "max": str(MAX_MONEY)},
        )
    return QuoteTotals(subtotal=to_money(subtotal), total=to_money(total))


def validate_status_transition(current: QuoteStatus, target: QuoteStatus) -> None:
    """Raise ValidationError unless current -> target is a forward step."""
    if target == current:
        return
    if target == QuoteStatus.INVOICED:
        raise ValidationError("Quotes become invoiced only by converting them to an invoice")
    if target not in ALLOWED_TRANSITIONS[current]:
        raise ValidationError(
            f"Cannot change quote status from {current.value} to {target.value}",
            details={"from": current.value, "to": target.value},
        )


def prepare_items(items: List[QuoteItemCreate]) -> List[dict]:
    """Validate submitted items and compute their subtotals."""
    prepared = []
    for index, item in enumerate(items):
        if item.quantity is None or not 0 < item.quantity <= MAX_QUANTITY:
            raise ValidationError(
                f"Item quantity must be a positive integer no larger than {MAX_QUANTITY}",
                details={"item": index, "quantity": item.quantity},
            )
        unit_price = bounded_money(item.unit_price, "unit_price")
        if unit_price < 0:
            raise ValidationError(
                "Item unit price must not be negative",
                details={"item": index, "unit_price": str(unit_price)},
            )
        subtotal = compute_item_subtotal(item.quantity, unit_price)
        if subtotal > MAX_MONEY:
            raise ValidationError(
                f"Item subtotal must not exceed {MAX_MONEY}",
                details={"item": index, "subtotal": str(subtotal)},
            )
        prepared.append({
            "description": item.description,
            "quantity": item.quantity,
            "unit_price": unit_price,
            "subtotal": subtotal,
            "sort_order": item.sort_order if item.sort_order is not None else index,
            "line_number": index,
        })
    return prepared


class QuoteService(BaseService):
    """Service for quote operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.quote_repo = QuoteRepository(session)
        self.quote_item_repo = QuoteItemRepository(session)
        self.client_repo = ClientRepository(session)
        self.invoice_repo = InvoiceRepository(session)
        self.numbering_service = NumberingService(session)
        self.setting_service = SettingService(session)

    async def create_quote(self, quote_data: QuoteCreate, created_by: UUID) -> QuoteDetailResponse:
        """Create a draft quote with its items and the next quote number."""
        client = await self.client_repo.get(quote_data.client_id)
        if not client:
            raise NotFoundError("Client not found", details={"client_id": str(quote_data.client_id)})

        items = prepare_items(quote_data.items)
        totals = compute_quote_totals(
            [(item["quantity"], item["unit_price"]) for item in items],
            **{name: getattr(quote_data, name) for name in MONEY_FIELDS},
        )

        quote_dict = quote_data.model_dump(exclude={"items", *MONEY_FIELDS}, exclude_none=True)
        quote_dict.update({name: to_money(getattr(quote_data, name)) for name in MONEY_FIELDS})

        try:
            prefix = await self.setting_service.get_quote_prefix()
            quote_number = await self.numbering_service.issue_number(DocumentSeries.QUOTE, prefix)
            quote = await self.quote_repo.create(
                **quote_dict,
                quote_number=quote_number,
                status=QuoteStatus.DRAFT,
                subtotal=totals.subtotal,
                total=totals.total,
                created_by=created_by,
            )
            await self.quote_item_repo.create_many(quote.id, items)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning(f"Quote creation conflicted: {e.orig}")
            raise ConflictError("Quote number already issued, retry the request") from e

        logger.info(
            f"Created quote {quote_number}",
            extra={"quote_id": str(quote.id), "total": str(totals.total), "items": len(items)},
        )
        return await self.get_quote_detail(quote.id)

    async def get_quote(self, quote_id: UUID) -> Optional[QuoteResponse]:
        """Get quote by ID."""
        quote = await self.quote_repo.get(quote_id)
        if not quote:
            return None
        return self._to_response(quote)

    async def get_quote_detail(self, quote_id: UUID) -> Optional[QuoteDetailResponse]:
        """Get quote with client and items."""
        quote = await self.quote_repo.get(quote_id)
        if not quote:
            return None
        response = QuoteDetailResponse.model_validate(quote)
        response.client_name = quote.client.name if quote.client else None
        return response

    async def list_quotes(
        self,
        skip: int = 0,
        limit: int = 100,
        status: Optional[QuoteStatus] = None,
        client_id: Optional[UUID] = None,
    ) -> Tuple[List[QuoteResponse], int]:
        """List quotes with filters, newest first."""
        filters = {"status": status, "client_id": client_id}
        quotes = await self.quote_repo.list(skip=skip, limit=limit, **filters)
        total = await self.quote_repo.count(**filters)
        return [self._to_response(quote) for quote in quotes], total

    async def update_quote(self, quote_id: UUID, quote_data: QuoteUpdate) -> QuoteDetailResponse:
        """
        Apply a partial update. A status change must follow the lifecycle;
        items, money fields and the client can change only while the quote
        is draft or sent. Totals are recomputed on every update.
        """
        quote = await self.quote_repo.get_for_update(quote_id)
        if not quote:
            raise NotFoundError("Quote not found", details={"quote_id": str(quote_id)})

        patch = quote_data.model_dump(exclude_unset=True)
        new_items = patch.pop("items", None)
        new_status = patch.pop("status", None)

        content_change = new_items is not None or any(
            name in patch for name in (*MONEY_FIELDS, "client_id")
        )
        if content_change and quote.status not in EDITABLE_STATUSES:
            raise ValidationError(
                f"Items and amounts of a {quote.status.value} quote cannot be changed",
                details={"status": quote.status.value},
            )
        if new_status is not None:
            validate_status_transition(quote.status, new_status)
            patch["status"] = new_status

        if patch.get("client_id") is not None:
            if not await self.client_repo.get(patch["client_id"]):
                raise NotFoundError("Client not found", details={"client_id": str(patch["client_id"])})
        else:
            patch.pop("client_id", None)

        if new_items is not None:
            items = prepare_items([QuoteItemCreate(**item) for item in new_items])
            pairs = [(item["quantity"], item["unit_price"]) for item in items]
        else:
            items = None
            pairs = [(item.quantity, item.unit_price) for item in quote.items]

        money = {name: patch[name] if patch.get(name) is not None else getattr(quote, name) for name in MONEY_FIELDS}
        totals = compute_quote_totals(pairs, **money)
        patch.update({name: to_money(value) for name, value in money.items()})
        patch.update(subtotal=totals.subtotal, total=totals.total)

        if items is not None:
            await self.quote_item_repo.delete_by_quote(quote_id)
            await self.quote_item_repo.create_many(quote_id, items)
        await self.quote_repo.update(quote_id, **patch)
        await self.session.commit()

        logger.info(
            f"Updated quote {quote.quote_number}",
            extra={"quote_id": str(quote_id), "fields": sorted(patch)},
        )
        return await self.get_quote_detail(quote_id)

    async def delete_quote(self, quote_id: UUID) -> bool:
        """Delete a quote and its items. Invoiced quotes cannot be deleted."""
        quote = await self.quote_repo.get_for_update(quote_id)
        if not quote:
            return False
        if await self.invoice_repo.get_by_quote(quote_id):
            raise ConflictError(
                "Quote has been converted to an invoice and cannot be deleted",
                details={"quote_id": str(quote_id)},
            )
        quote_number = quote.quote_number
        try:
            deleted = await self.quote_repo.delete_with_items(quote_id)
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise ConflictError(
                "Quote has been converted to an invoice and cannot be deleted",
                details={"quote_id": str(quote_id)},
            )
        logger.info(f"Deleted quote {quote_number}", extra={"quote_id": str(quote_id)})
        return deleted

    def _to_response(self, quote: Quote) -> QuoteResponse:
        response = QuoteResponse.model_validate(quote)
        response.client_name = quote.client.name if quote.client else None
        return response
