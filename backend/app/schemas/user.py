"""
User schemas.
"""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from uuid import UUID

from app.models.user import UserRole, UserStatus


class UserCreate(BaseModel):
    """User registered by an admin; credentials stay with the credential service."""
    email: str = Field(..., min_length=3, max_length=255)
    name: str = Field(..., min_length=1, max_length=255)
    role: UserRole = UserRole.USER


class UserResponse(BaseModel):
    """Authenticated user."""
    id: UUID
    email: str
    name: str
    role: UserRole
    status: UserStatus
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserListResponse(BaseModel):
    """Schema for user list response."""
    items: List[UserResponse]
    total: int
