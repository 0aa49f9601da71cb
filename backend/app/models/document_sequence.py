"""
Counter rows for document numbering, one per series.
The row is locked while a number is issued so concurrent writers serialize.
"""

from sqlalchemy import Column, String, DateTime
import enum

from app.db.base import Base
from app.utils.dates import utcnow


class DocumentSeries(str, enum.Enum):
    """Numbered document series."""
    QUOTE = "quote"
    INVOICE = "invoice"


class DocumentSequence(Base):
    """Last issued number of a document series."""

    __tablename__ = "document_sequences"

    series = Column(String(20), primary_key=True)
    last_number = Column(String(50), nullable=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
