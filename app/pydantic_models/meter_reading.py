"""
Pydantic models for Meter Readings following kkb_fastapi pattern.
"""

from datetime import date as DateType
from datetime import datetime
from decimal import Decimal
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.utils.constants import MAX_QUANTITY

ReadingSourceLiteral = Literal["manual", "csv_upload"]


class MeterReadingBase(BaseModel):
    """Base meter reading model."""

    consumption_kwh: Decimal = Field(
        ...,
        ge=0,
        le=MAX_QUANTITY,
        description="Electricity consumption in kWh",
        examples=[Decimal("245.5")],
    )
    emission_co2_kg: Decimal | None = Field(
        None,
        ge=0,
        le=MAX_QUANTITY,
        description="CO2 emissions in kg, omitted if unknown",
        examples=[Decimal("98.2")],
    )
    source: ReadingSourceLiteral = Field(
        "manual", description="Provenance tag: manual or csv_upload"
    )


class MeterReadingCreate(MeterReadingBase):
    """Model for creating a meter reading. Any day of the month may be sent."""

    reading_date: DateType = Field(
        ..., description="Date within the month the reading covers", examples=["2025-03-01"]
    )

    @field_validator("reading_date")
    @classmethod
    def normalise_to_first_of_month(cls, value: DateType) -> DateType:
        return value.replace(day=1)


class MeterReadingUpdate(BaseModel):
    """
    Model for updating a meter reading.

    The reading month is the dedup key and cannot be changed.
    """

    model_config = ConfigDict(extra="forbid")

    consumption_kwh: Decimal | None = Field(None, ge=0, le=MAX_QUANTITY)
    emission_co2_kg: Decimal | None = Field(None, ge=0, le=MAX_QUANTITY)
    source: ReadingSourceLiteral | None = None


class MeterReadingPydModel(MeterReadingBase):
    """Model for meter reading response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    reading_date: DateType
    created_at: datetime
    updated_at: datetime


class BatchDeleteRequest(BaseModel):
    """Request model for deleting several readings at once."""

    ids: list[UUID] = Field(..., min_length=1, description="Reading IDs to delete")


class BatchDeleteResponse(BaseModel):
    deleted_count: int


class CsvUploadResponse(BaseModel):
    """Response model for a successful CSV upload."""

    message: str
    uploaded_count: int
    readings: list[MeterReadingPydModel]


class MonthlySummaryPydModel(BaseModel):
    """Per-month totals for charts."""

    model_config = ConfigDict(from_attributes=True)

    month: str = Field(..., description="Calendar month as YYYY-MM", examples=["2025-03"])
    total_consumption_kwh: float
    total_emission_co2_kg: float
    emission_missing: bool = Field(
        False, description="True if a reading in the month has no emission recorded"
    )

    @field_validator("month", mode="before")
    @classmethod
    def format_month(cls, value):
        if isinstance(value, DateType):
            return value.strftime("%Y-%m")
        return value
