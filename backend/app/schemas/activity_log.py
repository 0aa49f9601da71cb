"""
Activity log schemas.
"""

from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime
from uuid import UUID


class ActivityLogResponse(BaseModel):
    """One audit entry."""
    id: UUID
    user_id: UUID
    action: str
    entity_type: str
    entity_id: Optional[UUID] = None
    timestamp: datetime

    class Config:
        from_attributes = True


class ActivityLogListResponse(BaseModel):
    """Audit entries for a user."""
    items: List[ActivityLogResponse]
    total: int
