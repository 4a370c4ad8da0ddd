"""
Database Module

Provides database configuration, models, schemas, and repositories.
"""

from .base import Base, utc_now
from .session import Database

__all__ = [
    "Base",
    "utc_now",
    "Database",
]
