"""
User and UserProfile SQLAlchemy models.

Accounts are owned by the external identity provider; `users` mirrors them
using the provider's subject id as primary key.
"""
from sqlalchemy import Column, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from app.database import Base
from app.database.schemas.base import TimestampMixin


class UserDBModel(Base, TimestampMixin):
    """Household account holder."""

    __tablename__ = "users"

    email = Column(String(255), nullable=True, unique=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    phone_number = Column(String(50), nullable=True)
    household_size = Column(Integer, nullable=True)
    address = Column(String(255), nullable=True)
    city = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)
    zip_code = Column(String(20), nullable=True)

    profile = relationship(
        "UserProfileDBModel",
        back_populates="user",
        uselist=False,
        lazy="selectin",
        cascade="all, delete-orphan",
    )

    __table_args__ = ({"comment": "Household account holders"},)

    def __repr__(self):
        return f"<UserDBModel: {self.id} ({self.email})>"


class UserProfileDBModel(Base, TimestampMixin):
    """Energy preferences of a user, including the electricity tariff."""

    __tablename__ = "user_profiles"

    user_id = Column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    target_reduction = Column(
        Numeric(5, 2),
        nullable=True,
        comment="Consumption reduction goal in percent",
    )

    eco_goals = Column(Text, nullable=True)

    electricity_rate_per_kwh = Column(
        Numeric(10, 4),
        nullable=True,
        comment="Electricity tariff in currency per kWh",
    )

    user = relationship("UserDBModel", back_populates="profile")

    def __repr__(self):
        return (
            f"<UserProfileDBModel: user={self.user_id} "
            f"rate={self.electricity_rate_per_kwh}>"
        )
