"""
MeterReading SQLAlchemy model.
"""
from sqlalchemy import (
    Column,
    Date,
    ForeignKey,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import UUID

from app.database import Base
from app.database.schemas.base import TimestampMixin
from app.utils.constants import ReadingSource


class MeterReadingDBModel(Base, TimestampMixin):
    """
    Monthly electricity meter reading.

    `reading_date` is always the first day of the month and is the
    dedup key per user.
    """

    __tablename__ = "meter_readings"

    user_id = Column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    reading_date = Column(
        Date,
        nullable=False,
        comment="First day of the calendar month the reading covers",
    )

    consumption_kwh = Column(
        Numeric(12, 4),
        nullable=False,
        comment="Electricity consumption in kilowatt-hours",
    )

    emission_co2_kg = Column(
        Numeric(12, 4),
        nullable=True,
        comment="CO2 emissions in kilograms, NULL when not recorded",
    )

    source = Column(
        String(50),
        nullable=False,
        default=ReadingSource.MANUAL,
        comment="Provenance tag: manual or csv_upload",
    )

    __table_args__ = (
        UniqueConstraint("user_id", "reading_date", name="uq_meter_readings_user_month"),
        {"comment": "Monthly electricity meter readings"},
    )

    def __repr__(self):
        return (
            f"<MeterReadingDBModel: {self.reading_date:%Y-%m} - "
            f"{self.consumption_kwh} kWh ({self.source})>"
        )
