"""
Project file schemas

Request bodies use the camelCase keys the frontend sends (filePath, ...).
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProjectFileSave(BaseModel):
    """Request model for saving a file"""
    model_config = ConfigDict(populate_by_name=True)

    file_path: str = Field(..., alias="filePath", min_length=1, max_length=1024)
    file_name: str = Field(..., alias="fileName", min_length=1, max_length=255)
    content: str = Field(..., description="File content; may be empty")
    file_type: str = Field("text", alias="fileType", max_length=50)

    @field_validator("file_path", "file_name")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("filePath, fileName, and content are required")
        return v


class ProjectFileDelete(BaseModel):
    """Request model for deleting a file"""
    model_config = ConfigDict(populate_by_name=True)

    file_path: str = Field(..., alias="filePath", min_length=1)


class ProjectFileResponse(BaseModel):
    """Response model for a project file"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    project_id: UUID
    file_path: str
    file_name: str
    content: str
    file_type: str
    size_bytes: int
    created_at: datetime
    updated_at: Optional[datetime] = None
