"""
User-related endpoints.

Provides endpoints for the current user's profile. All routes sit behind
the auth gate.
"""

from fastapi import APIRouter, Depends, status

from modules.users.interfaces import IUsersService
from modules.users.models import UpdateProfileRequest, UserProfile
from shared.models import AuthenticatedUser
from ..dependencies import get_users_service
from ..middleware.auth import get_current_user

router = APIRouter()


@router.get("/me", response_model=UserProfile)
async def get_current_user_profile(
    user: AuthenticatedUser = Depends(get_current_user),
) -> UserProfile:
    """
    Get the current user's profile.

    Served straight from the principal the auth gate loaded.
    """
    return UserProfile(**user.model_dump())


@router.put("/me", response_model=UserProfile)
async def update_current_user_profile(
    request: UpdateProfileRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUsersService = Depends(get_users_service),
) -> UserProfile:
    """Update name, last name, avatar or birthday."""
    return await service.update_profile(user.id, request)


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
async def delete_current_user(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUsersService = Depends(get_users_service),
) -> None:
    """Delete the current user's account."""
    await service.delete_account(user.id)
