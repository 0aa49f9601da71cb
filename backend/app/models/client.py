"""
Client model for customer management.
"""

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
import uuid

from app.db.base import Base
from app.utils.dates import utcnow


class Client(Base):
    """Client (customer) that quotes are addressed to."""

    __tablename__ = "clients"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(255), nullable=False, index=True)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    billing_address = Column(Text, nullable=True)
    shipping_address = Column(Text, nullable=True)
    gstin = Column(String(15), nullable=True)
    contact_person = Column(String(255), nullable=True)
    created_by = Column(Uuid, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)

    # Relationships
    creator = relationship("User")
    quotes = relationship("Quote", back_populates="client")
