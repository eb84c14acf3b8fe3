"""
Pydantic models for User Profile.
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.utils.constants import MAX_RATE_PER_KWH

USER_FIELDS = (
    "first_name",
    "last_name",
    "phone_number",
    "household_size",
    "address",
    "city",
    "state",
    "zip_code",
)
PROFILE_FIELDS = ("target_reduction", "eco_goals", "electricity_rate_per_kwh")


class UserProfileUpdate(BaseModel):
    """Model for updating the user and their energy profile. All fields optional."""

    model_config = ConfigDict(extra="forbid")

    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    phone_number: str | None = Field(None, max_length=50)
    household_size: int | None = Field(None, ge=1)
    address: str | None = Field(None, max_length=255)
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=100)
    zip_code: str | None = Field(None, max_length=20)
    target_reduction: Decimal | None = Field(
        None, ge=0, le=100, description="Reduction goal in percent"
    )
    eco_goals: str | None = None
    electricity_rate_per_kwh: Decimal | None = Field(
        None,
        ge=0,
        le=MAX_RATE_PER_KWH,
        description="Electricity tariff in currency per kWh",
        examples=[Decimal("6.5")],
    )

    def user_fields(self) -> dict:
        sent = self.model_dump(exclude_unset=True)
        return {k: v for k, v in sent.items() if k in USER_FIELDS}

    def profile_fields(self) -> dict:
        sent = self.model_dump(exclude_unset=True)
        return {k: v for k, v in sent.items() if k in PROFILE_FIELDS}


class UserProfileDetails(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    target_reduction: Decimal | None = None
    eco_goals: str | None = None
    electricity_rate_per_kwh: Decimal | None = None


class UserProfilePydModel(BaseModel):
    """Model for user profile response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone_number: str | None = None
    household_size: int | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    profile: UserProfileDetails | None = None
    created_at: datetime
    updated_at: datetime
