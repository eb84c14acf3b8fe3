"""
Repository for MeterReading database operations.
"""
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.repositories.base import UserScopedRepository
from app.database.repositories.exceptions import DuplicateReadingError
from app.database.schemas import MeterReadingDBModel
from app.database.schemas.base import utc_now


class MeterReadingRepository(UserScopedRepository[MeterReadingDBModel]):
    """Repository for meter reading operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(MeterReadingDBModel, session)

    async def get_by_month(
        self, user_id: UUID, reading_date: date
    ) -> Optional[MeterReadingDBModel]:
        """Get the user's reading for the month starting at ``reading_date``."""
        stmt = select(MeterReadingDBModel).where(
            MeterReadingDBModel.user_id == user_id,
            MeterReadingDBModel.reading_date == reading_date,
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def create_reading(
        self,
        user_id: UUID,
        reading_date: date,
        consumption_kwh: Decimal,
        emission_co2_kg: Optional[Decimal],
        source: str,
    ) -> MeterReadingDBModel:
        """
        Create a reading for a month the user has not recorded yet.

        Raises:
            DuplicateReadingError: If the (user, month) pair already exists
        """
        if await self.get_by_month(user_id, reading_date) is not None:
            raise DuplicateReadingError(user_id, reading_date)

        try:
            async with self.session.begin_nested():
                return await self.create(
                    user_id=user_id,
                    reading_date=reading_date,
                    consumption_kwh=consumption_kwh,
                    emission_co2_kg=emission_co2_kg,
                    source=source,
                )
        except IntegrityError as e:
            # Concurrent insert won the unique constraint
            raise DuplicateReadingError(user_id, reading_date) from e

    async def list_for_user(
        self,
        user_id: UUID,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
        newest_first: bool = True,
    ) -> List[MeterReadingDBModel]:
        """
        Get a user's readings, optionally limited to a date range.

        Args:
            user_id: Owner of the readings
            from_date: Start date (inclusive)
            to_date: End date (inclusive)
            newest_first: Order by reading month descending when True

        Returns:
            List of readings
        """
        stmt = select(MeterReadingDBModel).where(
            MeterReadingDBModel.user_id == user_id
        )
        if from_date is not None:
            stmt = stmt.where(MeterReadingDBModel.reading_date >= from_date)
        if to_date is not None:
            stmt = stmt.where(MeterReadingDBModel.reading_date <= to_date)

        order = MeterReadingDBModel.reading_date
        stmt = stmt.order_by(order.desc() if newest_first else order.asc())

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def upsert_many(self, user_id: UUID, rows: List[Dict[str, Any]]) -> int:
        """
        Insert readings, overwriting any existing reading for the same month.

        Args:
            user_id: Owner of the readings
            rows: Dicts with reading_date, consumption_kwh, emission_co2_kg, source

        Returns:
            Number of rows written
        """
        if not rows:
            return 0

        now = utc_now()
        values = [
            {**row, "user_id": user_id, "created_at": now, "updated_at": now}
            for row in rows
        ]
        stmt = insert(MeterReadingDBModel).values(values)
        stmt = stmt.on_conflict_do_update(
            constraint="uq_meter_readings_user_month",
            set_={
                "consumption_kwh": stmt.excluded.consumption_kwh,
                "emission_co2_kg": stmt.excluded.emission_co2_kg,
                "source": stmt.excluded.source,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return len(values)
