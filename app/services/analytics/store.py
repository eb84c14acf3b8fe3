"""
Storage access for baseline analytics.

The analytics service depends on the ``ReadingStore`` protocol rather than on
a session, so it can be exercised with any backend. ``SQLAlchemyReadingStore``
is the production implementation.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Optional, Protocol, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.database.repositories import MeterReadingRepository, UserRepository


@dataclass(frozen=True)
class UserRate:
    """Profile data the analytics need: the electricity rate, if configured."""

    user_id: UUID
    electricity_rate_per_kwh: Optional[Decimal] = None


class ReadingStore(Protocol):
    async def fetch_readings(
        self,
        user_id: UUID,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> Sequence[Any]:
        """Readings of the user, in any order."""
        ...

    async def fetch_profile(self, user_id: UUID) -> Optional[UserRate]:
        """Rate data of the user, None if the user does not exist."""
        ...


class SQLAlchemyReadingStore:
    """ReadingStore backed by the application database."""

    def __init__(self, session: AsyncSession):
        self.readings = MeterReadingRepository(session)
        self.users = UserRepository(session)

    async def fetch_readings(
        self,
        user_id: UUID,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> Sequence[Any]:
        return await self.readings.list_for_user(
            user_id, from_date=from_date, to_date=to_date, newest_first=False
        )

    async def fetch_profile(self, user_id: UUID) -> Optional[UserRate]:
        user = await self.users.get_by_id(user_id)
        if user is None:
            return None

        rate = user.profile.electricity_rate_per_kwh if user.profile else None
        return UserRate(user_id=user.id, electricity_rate_per_kwh=rate)
