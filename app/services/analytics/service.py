"""
Baseline analytics service.

Fetches a user's readings and rate through a ReadingStore and hands them to
the pure functions in ``baseline``.
"""

import logging
from uuid import UUID

from app.services.analytics.baseline import (
    DeviationResult,
    MonthlySummary,
    compute_baseline_deviation,
    compute_monthly_summaries,
)
from app.services.analytics.store import ReadingStore, UserRate
from app.utils.constants import MetricEnum

logger = logging.getLogger(__name__)


class UserNotFoundError(Exception):
    """Raised when analytics are requested for an unknown user."""

    def __init__(self, user_id: UUID):
        self.user_id = user_id
        super().__init__(f"User {user_id} not found")


class BaselineAnalyticsService:
    """Savings and CO2 reduction of one user against their first months."""

    def __init__(self, store: ReadingStore):
        self.store = store

    async def monthly_summaries(self, user_id: UUID) -> list[MonthlySummary]:
        readings = await self.store.fetch_readings(user_id)
        return compute_monthly_summaries(readings)

    async def total_savings(self, user_id: UUID) -> DeviationResult:
        """
        Cumulative monetary savings since the baseline period.

        Raises:
            UserNotFoundError: If the user does not exist
        """
        profile = await self._get_profile(user_id)
        summaries = await self.monthly_summaries(user_id)

        result = compute_baseline_deviation(
            summaries,
            MetricEnum.CONSUMPTION,
            rate=profile.electricity_rate_per_kwh,
        )
        logger.info(
            f"Total savings for user {user_id}: {result.value} ({result.status.value})"
        )
        return result

    async def total_co2_reduction(self, user_id: UUID) -> DeviationResult:
        """
        Cumulative CO2 reduction (kg) since the baseline period.

        Raises:
            UserNotFoundError: If the user does not exist
        """
        await self._get_profile(user_id)
        summaries = await self.monthly_summaries(user_id)

        result = compute_baseline_deviation(summaries, MetricEnum.EMISSION)
        logger.info(
            f"Total CO2 reduction for user {user_id}: {result.value} kg "
            f"({result.status.value})"
        )
        return result

    async def _get_profile(self, user_id: UUID) -> UserRate:
        profile = await self.store.fetch_profile(user_id)
        if profile is None:
            logger.warning(f"Analytics requested for unknown user {user_id}")
            raise UserNotFoundError(user_id)
        return profile
