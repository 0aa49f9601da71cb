"""
Audit trail of user actions.
"""

from sqlalchemy import Column, String, DateTime, ForeignKey, Uuid
import uuid

from app.db.base import Base
from app.utils.dates import utcnow


class ActivityLog(Base):
    """One recorded user action."""

    __tablename__ = "activity_logs"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    action = Column(String(100), nullable=False)
    entity_type = Column(String(50), nullable=False)
    entity_id = Column(Uuid, nullable=True)
    timestamp = Column(DateTime, nullable=False, default=utcnow, index=True)
