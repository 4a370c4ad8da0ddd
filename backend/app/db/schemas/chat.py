"""
Chat request schemas

Pydantic models for the code generation endpoints.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

MESSAGE_MAX_LENGTH = 10000
CODE_MAX_LENGTH = 50000


def _require_text(v: str, message: str) -> str:
    if not v or not v.strip():
        raise ValueError(message)
    return v.strip()


class ChatMessageRequest(BaseModel):
    """Natural-language request, optionally in the context of a project"""
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "message": "Add a button that changes the background color",
                "projectId": "123e4567-e89b-42d3-a456-426614174000",
            }
        },
    )

    message: str = Field(..., max_length=MESSAGE_MAX_LENGTH)
    project_id: Optional[str] = Field(None, alias="projectId")

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, v: str) -> str:
        return _require_text(v, "Message is required and must be a non-empty string")


class CodeRequest(BaseModel):
    """Base for requests that carry a code snippet"""
    code: str = Field(..., max_length=CODE_MAX_LENGTH)

    @field_validator("code")
    @classmethod
    def code_not_blank(cls, v: str) -> str:
        return _require_text(v, "Code is required and must be a non-empty string")


class ExplainCodeRequest(CodeRequest):
    language: str = Field("javascript", max_length=50)


class ImproveCodeRequest(CodeRequest):
    context: str = Field("", max_length=MESSAGE_MAX_LENGTH)


class GenerateTestsRequest(CodeRequest):
    framework: str = Field("jest", max_length=50)
