"""
API Routers Module

FastAPI routers and request dependencies
"""

from .chat_router import chat_router
from .health_router import health_router
from .project_router import project_router

__all__ = [
    "chat_router",
    "health_router",
    "project_router",
]
