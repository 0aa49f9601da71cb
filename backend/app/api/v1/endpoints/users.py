"""
User administration endpoints (admin only).
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.api.v1.middleware import require_admin
from app.db.session import get_db
from app.controllers.user_controller import UserController
from app.models.user import User, UserStatus
from app.schemas.user import UserCreate, UserListResponse, UserResponse

router = APIRouter()


@router.get("", response_model=UserListResponse)
async def list_users(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    status: Optional[UserStatus] = Query(None),
    db: AsyncSession = Depends(get_db),
) -> UserListResponse:
    """List users, newest first."""
    controller = UserController(db)
    return await controller.list_users(skip=skip, limit=limit, status=status)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> UserResponse:
    """Register a user. 409 when the email is taken."""
    controller = UserController(db)
    return await controller.create_user(user_data, current_user)


@router.delete("/{user_id}", response_model=UserResponse)
async def deactivate_user(
    user_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> UserResponse:
    """Deactivate a user; their records stay and their tokens stop working."""
    controller = UserController(db)
    return await controller.deactivate_user(user_id, current_user)
