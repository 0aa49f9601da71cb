"""
Quote Pydantic schemas for request/response validation.
Money is typed as Decimal and serialized as a string.
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from app.models.quote import QuoteStatus
from app.schemas.client import ClientResponse


class QuoteItemCreate(BaseModel):
    """Line item as submitted. sort_order defaults to the item's position."""
    description: str = Field(..., min_length=1)
    quantity: int = Field(default=1)
    unit_price: Decimal
    sort_order: Optional[int] = None


class QuoteItemResponse(BaseModel):
    """Response schema for quote line item."""
    id: UUID
    quote_id: UUID
    description: str
    quantity: int
    unit_price: Decimal
    subtotal: Decimal
    sort_order: int

    class Config:
        from_attributes = True


class QuoteBase(BaseModel):
    """Fields shared by quote create and response."""
    validity_days: int = Field(default=30, ge=1)
    reference_number: Optional[str] = Field(None, max_length=100)
    attention_to: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = None
    terms_and_conditions: Optional[str] = None


class QuoteCreate(QuoteBase):
    """Schema for creating a quote. Sign checks on money happen in the service."""
    client_id: UUID
    quote_date: Optional[datetime] = None
    items: List[QuoteItemCreate] = []
    discount: Decimal = Decimal("0")
    cgst: Decimal = Decimal("0")
    sgst: Decimal = Decimal("0")
    igst: Decimal = Decimal("0")
    shipping_charges: Decimal = Decimal("0")


class QuoteUpdate(BaseModel):
    """Partial quote update. items, when given, replace the current items."""
    client_id: Optional[UUID] = None
    status: Optional[QuoteStatus] = None
    validity_days: Optional[int] = Field(None, ge=1)
    quote_date: Optional[datetime] = None
    reference_number: Optional[str] = Field(None, max_length=100)
    attention_to: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = None
    terms_and_conditions: Optional[str] = None
    items: Optional[List[QuoteItemCreate]] = None
    discount: Optional[Decimal] = None
    cgst: Optional[Decimal] = None
    sgst: Optional[Decimal] = None
    igst: Optional[Decimal] = None
    shipping_charges: Optional[Decimal] = None


class QuoteResponse(QuoteBase):
    """Schema for quote response."""
    id: UUID
    quote_number: str
    client_id: UUID
    client_name: Optional[str] = None
    status: QuoteStatus
    quote_date: datetime
    subtotal: Decimal
    discount: Decimal
    cgst: Decimal
    sgst: Decimal
    igst: Decimal
    shipping_charges: Decimal
    total: Decimal
    created_by: UUID
    created_at: datetime
    updated_at: datetime
    items: List[QuoteItemResponse] = []

    class Config:
        from_attributes = True


class QuoteDetailResponse(QuoteResponse):
    """Quote with its client embedded."""
    client: Optional[ClientResponse] = None


class QuoteListResponse(BaseModel):
    """Schema for quote list response."""
    items: List[QuoteResponse]
    total: int
