"""
Invoice and payment history models.
"""

from sqlalchemy import Column, String, Text, Numeric, DateTime, ForeignKey, Uuid, Enum as SQLEnum
from sqlalchemy.orm import relationship
import uuid
import enum

from app.db.base import Base
from app.utils.dates import utcnow


class PaymentStatus(str, enum.Enum):
    """Invoice collection state, derived from paid amount, total and due date."""
    PENDING = "pending"
    PARTIAL = "partial"
    PAID = "paid"
    OVERDUE = "overdue"


class PaymentMethod(str, enum.Enum):
    """Accepted payment methods."""
    BANK_TRANSFER = "bank_transfer"
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    CHECK = "check"
    CASH = "cash"
    UPI = "upi"
    OTHER = "other"


class Invoice(Base):
    """Invoice materialized from exactly one quote."""

    __tablename__ = "invoices"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    invoice_number = Column(String(50), nullable=False, unique=True, index=True)
    quote_id = Column(Uuid, ForeignKey("quotes.id", ondelete="RESTRICT"), nullable=False, unique=True, index=True)
    payment_status = Column(SQLEnum(PaymentStatus), nullable=False, default=PaymentStatus.PENDING, index=True)
    due_date = Column(DateTime, nullable=False)
    paid_amount = Column(Numeric(12, 2), nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    # Relationships
    quote = relationship("Quote", back_populates="invoice")
    payments = relationship(
        "PaymentHistory",
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="PaymentHistory.payment_date.desc()",
    )


class PaymentHistory(Base):
    """A single payment recorded against an invoice."""

    __tablename__ = "payment_history"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    invoice_id = Column(Uuid, ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    payment_method = Column(SQLEnum(PaymentMethod), nullable=False)
    transaction_id = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    payment_date = Column(DateTime, nullable=False, default=utcnow)
    recorded_by = Column(Uuid, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    # Relationships
    invoice = relationship("Invoice", back_populates="payments")
    recorder = relationship("User")
