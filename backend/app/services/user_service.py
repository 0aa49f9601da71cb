"""
User administration: listing, registration and deactivation.
Users are deactivated rather than deleted because quotes, clients and
payments keep referencing them.
"""

import logging
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.db.repositories.user_repository import UserRepository
from app.models.user import UserStatus
from app.schemas.user import UserCreate, UserResponse
from app.services.base_service import BaseService

logger = logging.getLogger(__name__)


class UserService(BaseService):
    """Service for user administration."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repo = UserRepository(session)

    async def list_users(
        self,
        skip: int = 0,
        limit: int = 100,
        status: Optional[UserStatus] = None,
    ) -> Tuple[List[UserResponse], int]:
        """List users, newest first."""
        users = await self.user_repo.list(skip=skip, limit=limit, status=status)
        total = await self.user_repo.count(status=status)
        return [UserResponse.model_validate(user) for user in users], total

    async def create_user(self, user_data: UserCreate) -> UserResponse:
        """
        Register an active user.

        Raises:
            ConflictError: the email is already registered
        """
        if await self.user_repo.get_by_email(user_data.email):
            raise ConflictError("Email already exists", details={"email": user_data.email})
        try:
            user = await self.user_repo.create(**user_data.model_dump(), status=UserStatus.ACTIVE)
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise ConflictError("Email already exists", details={"email": user_data.email})
        logger.info(f"Created user {user.email}", extra={"user_id": str(user.id), "role": user.role.value})
        return UserResponse.model_validate(user)

    async def deactivate_user(self, user_id: UUID, acting_user_id: UUID) -> UserResponse:
        """
        Mark a user inactive; their tokens stop authenticating.

        Raises:
            ValidationError: an admin deactivating their own account
            NotFoundError: unknown user
        """
        if user_id == acting_user_id:
            raise ValidationError("Cannot deactivate your own account", details={"user_id": str(user_id)})
        user = await self.user_repo.get(user_id)
        if not user:
            raise NotFoundError("User not found", details={"user_id": str(user_id)})
        if user.status != UserStatus.INACTIVE:
            user = await self.user_repo.update(user_id, status=UserStatus.INACTIVE)
            await self.session.commit()
            logger.info(f"Deactivated user {user.email}", extra={"user_id": str(user_id)})
        return UserResponse.model_validate(user)
