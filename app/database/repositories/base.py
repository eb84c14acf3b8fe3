"""
Generic repositories over the declarative models.

``BaseRepository`` covers creation and primary-key lookups.
``UserScopedRepository`` adds the owner-filtered reads and writes used for
meter readings and appliances.
"""
from typing import Any, Generic, List, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType]):
    def __init__(self, model: Type[ModelType], session: AsyncSession):
        self.model = model
        self.session = session

    async def create(self, **data: Any) -> ModelType:
        """
        Insert a row and return it with server-side values loaded.

        The row is flushed, not committed; the request session commits.
        """
        instance = self.model(**data)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def get_by_id(self, id: UUID) -> Optional[ModelType]:
        return await self.session.get(self.model, id)

    async def exists(self, id: UUID) -> bool:
        stmt = select(self.model.id).where(self.model.id == id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None


class UserScopedRepository(BaseRepository[ModelType]):
    """
    Repository for models owned by a user (``user_id`` column).

    Every lookup is filtered by owner so one household can never read or
    modify another's rows.
    """

    async def get_for_user(self, id: UUID, user_id: UUID) -> Optional[ModelType]:
        """
        Get record by ID if it belongs to the user.

        Returns:
            Model instance if found and owned, None otherwise
        """
        stmt = select(self.model).where(
            self.model.id == id, self.model.user_id == user_id
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def update_for_user(
        self, id: UUID, user_id: UUID, **data: Any
    ) -> Optional[ModelType]:
        """
        Update fields of an owned record.

        Returns:
            Updated model instance if found, None otherwise
        """
        instance = await self.get_for_user(id, user_id)
        if instance is None:
            return None

        for field, value in data.items():
            setattr(instance, field, value)

        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def delete_for_user(self, id: UUID, user_id: UUID) -> bool:
        """
        Delete an owned record (hard delete).

        Returns:
            True if deleted, False if not found
        """
        stmt = delete(self.model).where(
            self.model.id == id, self.model.user_id == user_id
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def delete_many_for_user(self, ids: List[UUID], user_id: UUID) -> int:
        """
        Delete several owned records at once.

        Returns:
            Number of rows deleted
        """
        if not ids:
            return 0

        stmt = delete(self.model).where(
            self.model.id.in_(ids), self.model.user_id == user_id
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
