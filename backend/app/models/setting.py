"""
Key/value application settings (numbering prefixes and similar).
"""

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Uuid
import uuid

from app.db.base import Base
from app.utils.dates import utcnow


class Setting(Base):
    """A single setting entry."""

    __tablename__ = "settings"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    key = Column(String(100), nullable=False, unique=True, index=True)
    value = Column(Text, nullable=False)
    updated_by = Column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
