"""
Database base configuration and models

Provides the declarative base and the common timestamp columns shared by
all tables.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Uuid
from sqlalchemy.orm import declarative_base

# Declarative base class
Base = declarative_base()


def utc_now() -> datetime:
    """Naive UTC timestamp, stored as-is on every backend."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class BaseModel:
    """
    Base model - provides common fields and methods
    """

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, comment="Primary Key ID")
    created_at = Column(DateTime, nullable=False, default=utc_now, comment="Creation Time")

    def to_dict(self, exclude_fields=None):
        """
        Convert model instance to dictionary

        Args:
            exclude_fields: List of field names to exclude

        Returns:
            Dictionary representation of the model
        """
        exclude_fields = exclude_fields or []
        return {
            c.name: getattr(self, c.name)
            for c in self.__table__.columns
            if c.name not in exclude_fields
        }


class TimestampMixin:
    """Adds an updated_at column maintained on every write."""

    updated_at = Column(DateTime, nullable=False, default=utc_now, onupdate=utc_now, comment="Update Time")
