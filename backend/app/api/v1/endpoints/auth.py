"""
Authentication API endpoints.
Tokens are issued by the credential service; this only reports who holds one.
"""

from fastapi import APIRouter, Depends

from app.api.v1.middleware import require_authentication
from app.models.user import User
from app.schemas.user import UserResponse

router = APIRouter()


@router.get("/me", response_model=UserResponse)
async def get_current_user(
    current_user: User = Depends(require_authentication),
) -> UserResponse:
    """Get the authenticated user."""
    return UserResponse.model_validate(current_user)
