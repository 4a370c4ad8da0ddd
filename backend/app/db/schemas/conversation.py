"""
Conversation schemas
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ConversationResponse(BaseModel):
    """Response model for a conversation entry"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(..., description="Conversation ID")
    project_id: UUID = Field(..., description="Project ID")
    user_id: str
    message: str = Field(..., description="Prompt sent to the model")
    response: str = Field(..., description="Generated response")
    ai_model: str
    tokens_used: int = 0
    created_at: datetime
