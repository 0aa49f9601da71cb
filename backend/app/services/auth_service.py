"""
Authentication service.
Resolves bearer tokens issued by the credential service to active users.
"""

import logging
from typing import Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import create_access_token, decode_access_token
from app.db.repositories.user_repository import UserRepository
from app.models.user import User, UserRole, UserStatus
from app.services.base_service import BaseService

logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    """Token could not be resolved to a user."""


class InactiveUserError(Exception):
    """Token belongs to a user that is not active."""


class AuthService(BaseService):
    """Service for authentication operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repo = UserRepository(session)

    async def authenticate(self, token: str) -> User:
        """
        Resolve a bearer token to its user.

        Raises:
            AuthenticationError: invalid token, missing or unknown subject
            InactiveUserError: the user is not active
        """
        payload = decode_access_token(token)
        if not payload:
            raise AuthenticationError("Invalid authentication token")

        subject = payload.get("sub")
        if not subject:
            raise AuthenticationError("Token missing user ID")
        try:
            user_id = UUID(str(subject))
        except ValueError:
            raise AuthenticationError("Invalid user ID in token")

        user = await self.user_repo.get(user_id)
        if not user:
            raise AuthenticationError("User not found")
        if user.status != UserStatus.ACTIVE:
            raise InactiveUserError(f"User account is not active. Status: {user.status.value}")
        return user

    async def create_user(
        self,
        email: str,
        name: str,
        role: UserRole = UserRole.USER,
    ) -> User:
        """Register a user known to the credential service."""
        user = await self.user_repo.create(email=email, name=name, role=role, status=UserStatus.ACTIVE)
        await self.session.commit()
        logger.info(f"Created user {email}", extra={"user_id": str(user.id), "role": role.value})
        return user

    async def get_user_by_email(self, email: str) -> Optional[User]:
        return await self.user_repo.get_by_email(email)

    @staticmethod
    def issue_token(user: User) -> str:
        """Access token for a user; used by tooling and tests."""
        return create_access_token({"sub": str(user.id), "email": user.email, "role": user.role.value})
