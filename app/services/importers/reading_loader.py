"""
Load a household's meter readings from a CSV file on disk.

Used by the ``scripts/import_readings.py`` operator CLI to backfill history
for a user without going through the upload endpoint.

Usage:
    from app.services.importers.reading_loader import ReadingLoader

    async with ReadingLoader() as loader:
        stats = await loader.load_file(user_id, "readings.csv", rate=Decimal("0.28"))
"""

import logging
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.repositories import MeterReadingRepository, UserRepository
from app.database.schemas import MeterReadingDBModel
from app.database.session_manager.db_session import Database
from app.services.importers.csv_readings import (
    CsvImportError,
    decode_upload,
    parse_readings_csv,
)
from app.utils.constants import MAX_RATE_PER_KWH

logger = logging.getLogger(__name__)


class ReadingLoader:
    """Import readings for one user from a CSV file."""

    def __init__(self, session: AsyncSession | None = None):
        """
        Args:
            session: Optional async database session. If not provided, one is
                opened from Database on entry and committed on exit.
        """
        self._session = session
        self._external_session = session is not None

    async def __aenter__(self):
        if not self._external_session:
            db = Database()
            self._session = await db.__aenter__()
            self._db_context = db
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if not self._external_session and hasattr(self, "_db_context"):
            await self._db_context.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def session(self) -> AsyncSession:
        if not self._session:
            raise RuntimeError("Session not initialized. Use as context manager.")
        return self._session

    async def load_file(
        self,
        user_id: UUID,
        path: str | Path,
        email: Optional[str] = None,
        rate: Optional[Decimal] = None,
        replace: bool = False,
    ) -> dict[str, Any]:
        """
        Validate and write every reading in ``path`` for ``user_id``.

        The user is created if missing. Nothing is written when any row is
        invalid; the row errors are returned instead.

        Args:
            user_id: Owner of the readings
            path: CSV file with the upload endpoint's columns
            email: Email for a newly created user
            rate: Electricity rate to store on the profile, if given
            replace: Delete the user's existing readings first

        Returns:
            Stats dict with ``parsed``, ``written`` and ``errors``

        Raises:
            CsvImportError: If the file is missing or not readable as CSV
            ValueError: If ``rate`` is negative or above MAX_RATE_PER_KWH
        """
        if rate is not None and not 0 <= rate <= MAX_RATE_PER_KWH:
            raise ValueError(f"Electricity rate must be between 0 and {MAX_RATE_PER_KWH}")

        path = Path(path)
        if not path.is_file():
            raise CsvImportError(f"CSV file not found: {path}")

        parsed = parse_readings_csv(decode_upload(path.read_bytes()))
        stats = {"parsed": len(parsed.rows), "written": 0, "errors": parsed.errors}

        if parsed.errors:
            logger.warning(f"{path.name}: {len(parsed.errors)} invalid rows, nothing written")
            return stats

        profile_fields = {"electricity_rate_per_kwh": rate} if rate is not None else {}
        await UserRepository(self.session).save_with_profile(
            user_id, user_fields={}, profile_fields=profile_fields, email=email
        )

        if replace:
            await self.session.execute(
                delete(MeterReadingDBModel).where(MeterReadingDBModel.user_id == user_id)
            )
            logger.info(f"Cleared existing readings of user {user_id}")

        stats["written"] = await MeterReadingRepository(self.session).upsert_many(
            user_id, parsed.rows
        )
        logger.info(f"Loaded {stats['written']} readings for user {user_id} from {path.name}")
        return stats
