"""
Analytics API router.

Savings and CO2 reduction relative to the user's first months of readings.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.dependencies import CurrentUser, get_analytics_service, get_current_user
from app.pydantic_models.analytics import DeviationResultPydModel
from app.services.analytics import BaselineAnalyticsService, UserNotFoundError

router = APIRouter(
    prefix="/api/v1/analytics",
    tags=["Analytics"],
)

logger = logging.getLogger(__name__)


@router.get("/total-savings", response_model=DeviationResultPydModel)
async def get_total_savings(
    user: CurrentUser = Depends(get_current_user),
    service: BaselineAnalyticsService = Depends(get_analytics_service),
):
    """
    Cumulative monetary savings since the baseline period.

    The baseline is the average consumption of the first 3 months with
    readings. Every later month contributes (baseline - actual) kWh, and the
    total is multiplied by the profile's electricity rate.

    Status values:
    - ok: value holds the savings
    - rate_missing: no positive electricity rate in the profile
    - no_data: no readings yet
    - insufficient_baseline: fewer than 3 months of readings

    Example:
        ```
        GET /api/v1/analytics/total-savings
        {"value": 487.5, "status": "ok", "message": "...", "months_needed": null}
        ```
    """
    try:
        result = await service.total_savings(user.id)
    except UserNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found.")

    return DeviationResultPydModel.model_validate(result)


@router.get("/total-co2-reduction", response_model=DeviationResultPydModel)
async def get_total_co2_reduction(
    user: CurrentUser = Depends(get_current_user),
    service: BaselineAnalyticsService = Depends(get_analytics_service),
):
    """
    Cumulative CO2 reduction in kg since the baseline period.

    Same baseline rule as total savings, applied to recorded emissions.
    Months without an emission value count as 0 kg.
    """
    try:
        result = await service.total_co2_reduction(user.id)
    except UserNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found.")

    return DeviationResultPydModel.model_validate(result)
