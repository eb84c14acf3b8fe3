"""
Appliance SQLAlchemy model.
"""
from sqlalchemy import Column, Date, ForeignKey, Integer, Numeric, String
from sqlalchemy.dialects.postgresql import UUID

from app.database import Base
from app.database.schemas.base import TimestampMixin


class ApplianceDBModel(Base, TimestampMixin):
    """Household appliance in a user's inventory."""

    __tablename__ = "appliances"

    user_id = Column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    type = Column(String(100), nullable=False, comment="Appliance kind, e.g. Refrigerator")
    model_name = Column(String(200), nullable=True)
    age_years = Column(Integer, nullable=True)
    purchase_date = Column(Date, nullable=True)
    energy_star_rating = Column(String(50), nullable=True)
    power_consumption_watts = Column(Numeric(10, 2), nullable=True)
    energy_efficiency_rating = Column(String(50), nullable=True)
    average_daily_usage_hours = Column(Numeric(5, 2), nullable=True)
    capacity = Column(String(100), nullable=True)

    def __repr__(self):
        return f"<ApplianceDBModel: {self.type} ({self.model_name})>"
