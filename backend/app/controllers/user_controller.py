"""
User administration controller.
"""

from typing import Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.base_controller import BaseController
from app.models.user import User, UserStatus
from app.services.activity_log_service import ActivityLogService
from app.services.user_service import UserService
from app.schemas.user import UserCreate, UserListResponse, UserResponse


class UserController(BaseController):
    """Controller for user administration."""

    def __init__(self, session: AsyncSession):
        self.user_service = UserService(session)
        self.activity_log_service = ActivityLogService(session)

    async def list_users(
        self,
        skip: int = 0,
        limit: int = 100,
        status: Optional[UserStatus] = None,
    ) -> UserListResponse:
        """List users, newest first."""
        users, total = await self.user_service.list_users(skip=skip, limit=limit, status=status)
        return UserListResponse(items=users, total=total)

    async def create_user(self, user_data: UserCreate, current_user: User) -> UserResponse:
        """Register a user."""
        user = await self.user_service.create_user(user_data)
        await self.activity_log_service.log(current_user.id, "create_user", "user", user.id)
        return user

    async def deactivate_user(self, user_id: UUID, current_user: User) -> UserResponse:
        """Deactivate a user other than the caller."""
        user = await self.user_service.deactivate_user(user_id, acting_user_id=current_user.id)
        await self.activity_log_service.log(current_user.id, "deactivate_user", "user", user_id)
        return user
