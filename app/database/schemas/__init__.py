"""
SQLAlchemy database models (schemas).
"""
from app.database.schemas.appliance import ApplianceDBModel
from app.database.schemas.meter_reading import MeterReadingDBModel
from app.database.schemas.user import UserDBModel, UserProfileDBModel

__all__ = [
    "ApplianceDBModel",
    "MeterReadingDBModel",
    "UserDBModel",
    "UserProfileDBModel",
]
