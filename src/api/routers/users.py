"""Current user profile endpoints."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user
from schemas.current_user import AuthenticatedUser
from schemas.user import UserResponse, UserUpdate
from services import user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_me(
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> UserResponse:
    """Get the authenticated user's profile."""
    return UserResponse.model_validate(current_user)


@router.patch("", response_model=UserResponse)
@router.patch("/", response_model=UserResponse, include_in_schema=False)
async def update_me(
    data: UserUpdate,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> UserResponse:
    """Update the authenticated user's profile. Only supplied fields change."""
    user = await user_service.update_user(db, current_user.id, data)
    # The guard resolved this user within the same session, so it still exists
    return UserResponse.model_validate(user)
