"""
Conversation model definition

Append-only log of prompts sent to the AI provider and the responses.
"""

from sqlalchemy import Column, String, Integer, Text, ForeignKey, Index, Uuid

from app.db.base import Base, BaseModel


class Conversation(Base, BaseModel):
    """
    Conversations table

    Rows are never updated or deleted; created_at orders them.
    """
    __tablename__ = "conversations"

    project_id = Column(Uuid, ForeignKey("projects.id"), nullable=False, comment="Project ID")
    user_id = Column(String(255), nullable=False, comment="Caller identity")
    message = Column(Text, nullable=False, comment="Prompt sent")
    response = Column(Text, nullable=False, comment="Generated response")
    ai_model = Column(String(100), nullable=False, comment="Model tag")
    tokens_used = Column(Integer, nullable=False, default=0, comment="Total tokens used")

    __table_args__ = (
        Index("idx_conversations_project_created", "project_id", "created_at"),
    )

    def __repr__(self):
        return f"<Conversation(id={self.id}, project_id={self.project_id}, model={self.ai_model!r})>"
