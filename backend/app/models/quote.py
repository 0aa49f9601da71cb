"""
Quote and quote line item models.
"""

from sqlalchemy import Column, String, Text, Integer, Numeric, DateTime, ForeignKey, Uuid, Enum as SQLEnum
from sqlalchemy.orm import relationship
import uuid
import enum

from app.db.base import Base
from app.utils.dates import utcnow


class QuoteStatus(str, enum.Enum):
    """Quote status enumeration."""
    DRAFT = "draft"
    SENT = "sent"
    APPROVED = "approved"
    REJECTED = "rejected"
    INVOICED = "invoiced"


class Quote(Base):
    """Priced proposal to a client."""

    __tablename__ = "quotes"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    quote_number = Column(String(50), nullable=False, unique=True, index=True)
    client_id = Column(Uuid, ForeignKey("clients.id", ondelete="RESTRICT"), nullable=False, index=True)
    status = Column(SQLEnum(QuoteStatus), nullable=False, default=QuoteStatus.DRAFT, index=True)
    validity_days = Column(Integer, nullable=False, default=30)
    quote_date = Column(DateTime, nullable=False, default=utcnow)
    reference_number = Column(String(100), nullable=True)
    attention_to = Column(String(255), nullable=True)
    subtotal = Column(Numeric(12, 2), nullable=False, default=0)
    discount = Column(Numeric(12, 2), nullable=False, default=0)
    cgst = Column(Numeric(12, 2), nullable=False, default=0)
    sgst = Column(Numeric(12, 2), nullable=False, default=0)
    igst = Column(Numeric(12, 2), nullable=False, default=0)
    shipping_charges = Column(Numeric(12, 2), nullable=False, default=0)
    total = Column(Numeric(12, 2), nullable=False, default=0)
    notes = Column(Text, nullable=True)
    terms_and_conditions = Column(Text, nullable=True)
    created_by = Column(Uuid, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    # Relationships
    client = relationship("Client", back_populates="quotes")
    creator = relationship("User")
    items = relationship(
        "QuoteItem",
        back_populates="quote",
        order_by=lambda: [QuoteItem.sort_order, QuoteItem.line_number],
    )
    invoice = relationship("Invoice", back_populates="quote", uselist=False)


class QuoteItem(Base):
    """Line item of a quote. subtotal is always quantity * unit_price."""

    __tablename__ = "quote_items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    quote_id = Column(Uuid, ForeignKey("quotes.id", ondelete="CASCADE"), nullable=False, index=True)
    description = Column(Text, nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    unit_price = Column(Numeric(12, 2), nullable=False)
    subtotal = Column(Numeric(12, 2), nullable=False)
    sort_order = Column(Integer, nullable=False, default=0)
    line_number = Column(Integer, nullable=False, default=0)  # insertion order, breaks sort_order ties

    # Relationships
    quote = relationship("Quote", back_populates="items")
