"""
Invoice Pydantic schemas for request/response validation.
"""

from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from app.models.invoice import PaymentStatus
from app.schemas.quote import QuoteDetailResponse
from app.schemas.payment import PaymentResponse


class InvoiceResponse(BaseModel):
    """Invoice with the quote figures a list view needs."""
    id: UUID
    invoice_number: str
    quote_id: UUID
    payment_status: PaymentStatus
    due_date: datetime
    paid_amount: Decimal
    created_at: datetime
    updated_at: datetime
    quote_number: Optional[str] = None
    client_name: Optional[str] = None
    total: Optional[Decimal] = None
    balance_due: Optional[Decimal] = None

    class Config:
        from_attributes = True


class InvoiceDetailResponse(InvoiceResponse):
    """Invoice with quote, client, items and payments."""
    quote: QuoteDetailResponse
    payments: List[PaymentResponse] = []


class InvoiceListResponse(BaseModel):
    """Schema for invoice list response."""
    items: List[InvoiceResponse]
    total: int


class OverdueRefreshResponse(BaseModel):
    """Result of an overdue sweep."""
    updated: int
