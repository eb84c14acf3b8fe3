"""
User Profile API router.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import CurrentUser, get_current_user, get_db_session
from app.database.repositories import UserRepository
from app.pydantic_models.user_profile import UserProfilePydModel, UserProfileUpdate

router = APIRouter(
    prefix="/api/v1/profile",
    tags=["User Profile"],
)

logger = logging.getLogger(__name__)


@router.get("/", response_model=UserProfilePydModel)
async def get_user_profile(
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Get the authenticated user's details and energy profile."""
    record = await UserRepository(session).get_by_id(user.id)

    if not record:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User profile not found.",
        )

    return record


@router.put("/", response_model=UserProfilePydModel)
async def update_user_profile(
    payload: UserProfileUpdate,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """
    Create or update the user's details and energy profile.

    The user row is created on first save. User and profile fields are
    written in the same transaction.

    Example:
        ```
        PUT /api/v1/profile
        {"household_size": 4, "city": "Pune", "electricity_rate_per_kwh": 6.5}
        ```
    """
    record = await UserRepository(session).save_with_profile(
        user.id,
        user_fields=payload.user_fields(),
        profile_fields=payload.profile_fields(),
        email=user.email,
    )
    logger.info(f"Saved profile for user {user.id}")
    return record
