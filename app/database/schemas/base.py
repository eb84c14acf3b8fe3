"""
Shared column mixins for household energy models.
"""
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime
from sqlalchemy.dialects.postgresql import UUID


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    """Primary key and audit timestamps common to every table."""

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False
    )
