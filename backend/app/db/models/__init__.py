"""
Database Models

SQLAlchemy ORM models for the application.
"""

from .project import Project, ProjectStatus
from .project_file import ProjectFile
from .conversation import Conversation

__all__ = [
    "Project",
    "ProjectStatus",
    "ProjectFile",
    "Conversation",
]
