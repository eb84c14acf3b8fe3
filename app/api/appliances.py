"""
Appliances API router.

Inventory of the household's appliances.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import CurrentUser, get_current_user, get_db_session
from app.database.repositories import ApplianceRepository, UserRepository
from app.pydantic_models.appliance import (
    ApplianceCreate,
    AppliancePydModel,
    ApplianceUpdate,
)

router = APIRouter(
    prefix="/api/v1/appliances",
    tags=["Appliances"],
)

logger = logging.getLogger(__name__)

NOT_FOUND = "Appliance not found or does not belong to user."


@router.post("/", response_model=AppliancePydModel, status_code=status.HTTP_201_CREATED)
async def add_appliance(
    payload: ApplianceCreate,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Add an appliance to the user's inventory."""
    if not await UserRepository(session).exists(user.id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User not found. Complete your profile first.",
        )

    appliance = await ApplianceRepository(session).create(
        user_id=user.id, **payload.model_dump()
    )
    logger.info(f"Added appliance {appliance.id} ({appliance.type})")
    return appliance


@router.get("/", response_model=list[AppliancePydModel])
async def list_appliances(
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """List appliances, most recently added first."""
    return await ApplianceRepository(session).list_for_user(user.id)


@router.get("/{appliance_id}", response_model=AppliancePydModel)
async def get_appliance(
    appliance_id: UUID,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Get appliance by ID."""
    appliance = await ApplianceRepository(session).get_for_user(appliance_id, user.id)

    if not appliance:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)

    return appliance


@router.put("/{appliance_id}", response_model=AppliancePydModel)
async def update_appliance(
    appliance_id: UUID,
    payload: ApplianceUpdate,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Update the fields sent in the body."""
    changes = payload.model_dump(exclude_unset=True)
    if not changes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No fields provided for update.",
        )
    if changes.get("type", "") is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Appliance type cannot be empty.",
        )

    appliance = await ApplianceRepository(session).update_for_user(
        appliance_id, user.id, **changes
    )

    if not appliance:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)

    return appliance


@router.delete("/{appliance_id}")
async def delete_appliance(
    appliance_id: UUID,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Delete an appliance."""
    deleted = await ApplianceRepository(session).delete_for_user(appliance_id, user.id)

    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)

    return {"message": "Appliance deleted successfully."}
