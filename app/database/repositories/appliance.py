"""
Repository for Appliance database operations.
"""
from typing import List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.repositories.base import UserScopedRepository
from app.database.schemas import ApplianceDBModel


class ApplianceRepository(UserScopedRepository[ApplianceDBModel]):
    """Repository for appliance inventory operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(ApplianceDBModel, session)

    async def list_for_user(self, user_id: UUID) -> List[ApplianceDBModel]:
        """Get a user's appliances, most recently added first."""
        stmt = (
            select(ApplianceDBModel)
            .where(ApplianceDBModel.user_id == user_id)
            .order_by(ApplianceDBModel.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
