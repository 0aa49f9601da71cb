"""
Payment history schemas.
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from app.models.invoice import PaymentMethod, PaymentStatus


class PaymentCreate(BaseModel):
    """
    Payment as submitted. Amount and method are checked by the service so
    direct callers get the same errors as API clients.
    """
    amount: Decimal
    payment_method: str = Field(..., description="bank_transfer, credit_card, debit_card, check, cash, upi or other")
    payment_date: Optional[datetime] = None
    transaction_id: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = None


class PaymentResponse(BaseModel):
    """Recorded payment entry."""
    id: UUID
    invoice_id: UUID
    amount: Decimal
    payment_method: PaymentMethod
    transaction_id: Optional[str] = None
    notes: Optional[str] = None
    payment_date: datetime
    recorded_by: UUID
    created_at: datetime

    class Config:
        from_attributes = True


class PaymentRecordResponse(PaymentResponse):
    """Created payment plus the invoice state it produced."""
    invoice_paid_amount: Decimal
    invoice_payment_status: PaymentStatus
    warning: Optional[str] = None


class PaymentListResponse(BaseModel):
    """Payments for one invoice."""
    items: List[PaymentResponse]
    total: int
