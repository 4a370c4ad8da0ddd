"""
Database Schemas

Pydantic models for request/response validation.
"""

from .project import (
    ProjectCreate,
    ProjectUpdate,
    ProjectResponse,
    ProjectSummaryResponse,
)
from .project_file import (
    ProjectFileSave,
    ProjectFileDelete,
    ProjectFileResponse,
)
from .conversation import ConversationResponse
from .chat import (
    ChatMessageRequest,
    ExplainCodeRequest,
    ImproveCodeRequest,
    GenerateTestsRequest,
)

__all__ = [
    # Project
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectResponse",
    "ProjectSummaryResponse",
    # Project files
    "ProjectFileSave",
    "ProjectFileDelete",
    "ProjectFileResponse",
    # Conversations
    "ConversationResponse",
    # Chat
    "ChatMessageRequest",
    "ExplainCodeRequest",
    "ImproveCodeRequest",
    "GenerateTestsRequest",
]
