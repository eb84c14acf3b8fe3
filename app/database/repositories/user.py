"""
Repository for User and UserProfile database operations.
"""
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.database.repositories.base import BaseRepository
from app.database.schemas import UserDBModel, UserProfileDBModel


class UserRepository(BaseRepository[UserDBModel]):
    """Repository for users and their one-to-one profile."""

    def __init__(self, session: AsyncSession):
        super().__init__(UserDBModel, session)

    async def save_with_profile(
        self,
        user_id: UUID,
        user_fields: Dict[str, Any],
        profile_fields: Dict[str, Any],
        email: Optional[str] = None,
    ) -> UserDBModel:
        """
        Create or update a user and their profile in one flush.

        Only keys present in the dicts are written, so callers pass the
        fields the client actually sent.

        Args:
            user_id: Identity-provider subject id
            user_fields: Columns of ``users`` to set
            profile_fields: Columns of ``user_profiles`` to set
            email: Email from the access token, used when creating the user

        Returns:
            The saved user with its profile loaded
        """
        user = await self.get_by_id(user_id)
        if user is None:
            user = UserDBModel(id=user_id, email=email)
            self.session.add(user)

        for field, value in user_fields.items():
            setattr(user, field, value)

        if user.profile is None:
            user.profile = UserProfileDBModel()
        for field, value in profile_fields.items():
            setattr(user.profile, field, value)

        await self.session.flush()
        await self.session.refresh(user, attribute_names=["profile"])
        return user
