"""
Services Module

Business logic layer
"""

from .project_service import ProjectService
from .chat_service import ChatService
from .health_service import HealthService

__all__ = [
    "ProjectService",
    "ChatService",
    "HealthService",
]
