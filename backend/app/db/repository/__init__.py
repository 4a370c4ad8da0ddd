"""
Database Repositories

Repository pattern implementation for data access.
"""

from .base_repository import BaseRepository
from .project_repository import ProjectRepository
from .project_file_repository import ProjectFileRepository, content_size
from .conversation_repository import (
    ConversationRepository,
    DEFAULT_HISTORY_LIMIT,
    MAX_HISTORY_LIMIT,
    clamp_limit,
)

__all__ = [
    "BaseRepository",
    "ProjectRepository",
    "ProjectFileRepository",
    "ConversationRepository",
    "content_size",
    "clamp_limit",
    "DEFAULT_HISTORY_LIMIT",
    "MAX_HISTORY_LIMIT",
]
