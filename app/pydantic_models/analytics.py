"""
Pydantic models for baseline analytics responses.
"""

from pydantic import BaseModel, ConfigDict, Field

from app.utils.constants import OutcomeStatus


class DeviationResultPydModel(BaseModel):
    """Savings or CO2 reduction relative to the baseline period."""

    model_config = ConfigDict(from_attributes=True)

    value: float = Field(
        ...,
        description="Currency for savings, kg CO2 for reduction; 0 unless status is ok",
        examples=[487.5],
    )
    status: OutcomeStatus = Field(..., examples=["ok"])
    message: str
    months_needed: int | None = Field(
        None, description="Months of data required, set for insufficient_baseline"
    )
