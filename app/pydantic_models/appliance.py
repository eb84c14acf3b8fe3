"""
Pydantic models for Appliances following kkb_fastapi pattern.
"""

from datetime import date as DateType
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.utils.constants import MAX_POWER_WATTS


class ApplianceBase(BaseModel):
    """Base appliance model."""

    type: str = Field(..., max_length=100, description="Appliance kind", examples=["Refrigerator"])
    model_name: str | None = Field(None, max_length=200)
    age_years: int | None = Field(None, ge=0)
    purchase_date: DateType | None = None
    energy_star_rating: str | None = Field(None, max_length=50)
    power_consumption_watts: Decimal | None = Field(None, ge=0, le=MAX_POWER_WATTS)
    energy_efficiency_rating: str | None = Field(None, max_length=50)
    average_daily_usage_hours: Decimal | None = Field(None, ge=0, le=24)
    capacity: str | None = Field(None, max_length=100)


class ApplianceCreate(ApplianceBase):
    """Model for creating an appliance."""


class ApplianceUpdate(BaseModel):
    """Model for updating an appliance. Only sent fields are changed."""

    model_config = ConfigDict(extra="forbid")

    type: str | None = Field(None, max_length=100)
    model_name: str | None = Field(None, max_length=200)
    age_years: int | None = Field(None, ge=0)
    purchase_date: DateType | None = None
    energy_star_rating: str | None = Field(None, max_length=50)
    power_consumption_watts: Decimal | None = Field(None, ge=0, le=MAX_POWER_WATTS)
    energy_efficiency_rating: str | None = Field(None, max_length=50)
    average_daily_usage_hours: Decimal | None = Field(None, ge=0, le=24)
    capacity: str | None = Field(None, max_length=100)


class AppliancePydModel(ApplianceBase):
    """Model for appliance response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    created_at: datetime
    updated_at: datetime
