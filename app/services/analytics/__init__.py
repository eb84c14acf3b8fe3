"""
Baseline deviation analytics: monthly grouping, savings and CO2 reduction.
"""
from app.services.analytics.baseline import (
    DeviationResult,
    MonthlySummary,
    compute_baseline_deviation,
    compute_monthly_summaries,
    cumulative_deviation,
)
from app.services.analytics.service import BaselineAnalyticsService, UserNotFoundError
from app.services.analytics.store import ReadingStore, SQLAlchemyReadingStore, UserRate

__all__ = [
    "BaselineAnalyticsService",
    "DeviationResult",
    "MonthlySummary",
    "ReadingStore",
    "SQLAlchemyReadingStore",
    "UserNotFoundError",
    "UserRate",
    "compute_baseline_deviation",
    "compute_monthly_summaries",
    "cumulative_deviation",
]
