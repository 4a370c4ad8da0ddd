"""
Project Schemas

Pydantic models for Project validation and serialization
"""

from typing import Any, Dict, Optional
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.db.models import ProjectStatus

NAME_MAX_LENGTH = 255


def _clean_name(v: Optional[str]) -> str:
    if v is None or not v.strip():
        raise ValueError("Project name is required and must be a non-empty string")
    name = v.strip()
    if len(name) > NAME_MAX_LENGTH:
        raise ValueError(f"Project name must be at most {NAME_MAX_LENGTH} characters")
    return name


class ProjectCreate(BaseModel):
    """Schema for creating a project"""
    name: str = Field(..., description="Project name")
    description: Optional[str] = Field("", description="Project description")
    template: Optional[str] = Field(None, max_length=100, description="Scaffold template, e.g. react-basic")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        return _clean_name(v)

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: Optional[str]) -> str:
        return (v or "").strip()


class ProjectUpdate(BaseModel):
    """
    Schema for updating a project

    Only these fields can be changed; anything else in the body is dropped.
    """
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = Field(None, description="Project name")
    description: Optional[str] = Field(None, description="Project description")
    status: Optional[ProjectStatus] = Field(None, description="active or deleted")
    settings: Optional[Dict[str, Any]] = Field(None, description="Additional configuration")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: Optional[str]) -> str:
        return _clean_name(v)

    @field_validator("description")
    @classmethod
    def description_not_null(cls, v: Optional[str]) -> str:
        return (v or "").strip()

    @field_validator("status")
    @classmethod
    def status_not_null(cls, v: Optional[ProjectStatus]) -> ProjectStatus:
        if v is None:
            raise ValueError("Status must be 'active' or 'deleted'")
        return v

    def changes(self) -> Dict[str, Any]:
        """Fields the client actually sent"""
        return self.model_dump(exclude_unset=True)


class ProjectResponse(BaseModel):
    """Schema for project response"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: str
    name: str
    description: Optional[str] = ""
    template_used: Optional[str] = None
    status: str
    settings: Optional[Dict[str, Any]] = None
    created_at: datetime
    updated_at: datetime


class ProjectSummaryResponse(ProjectResponse):
    """Project list entry with aggregate counts"""
    file_count: int = 0
    conversation_count: int = 0
    last_conversation: Optional[datetime] = None
