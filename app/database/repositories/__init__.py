"""
Database repositories for data access layer.

Provides clean abstraction over database operations following repository pattern.
"""
from app.database.repositories.appliance import ApplianceRepository
from app.database.repositories.base import BaseRepository, UserScopedRepository
from app.database.repositories.exceptions import DuplicateReadingError
from app.database.repositories.meter_reading import MeterReadingRepository
from app.database.repositories.user import UserRepository

__all__ = [
    "ApplianceRepository",
    "BaseRepository",
    "DuplicateReadingError",
    "MeterReadingRepository",
    "UserRepository",
    "UserScopedRepository",
]
