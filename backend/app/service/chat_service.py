"""
Chat Service

Business logic for code generation, explanation, improvement and test
generation, plus per-project conversation history.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from app.config.logging_config import log_print
from app.core.ai_service import AIResult, AIService
from app.db.persistence_service import PersistenceService
from app.db.repository import clamp_limit
from app.db.schemas import (
    ChatMessageRequest,
    ConversationResponse,
    ExplainCodeRequest,
    GenerateTestsRequest,
    ImproveCodeRequest,
)
from app.utils.exceptions import AIServiceError, NotFoundError
from app.utils.model.response_model import BaseResponse
from app.utils.prompt import build_project_context
from app.utils.validators import parse_uuid

logger = logging.getLogger(__name__)

CHAT_ENDPOINTS = [
    "POST /api/chat/message - Generate code from natural language",
    "POST /api/chat/explain - Explain existing code",
    "POST /api/chat/improve - Suggest code improvements",
    "POST /api/chat/tests - Generate unit tests",
    "GET /api/chat/conversations/{projectId} - Get conversation history",
    "GET /api/chat/status - Get AI service status",
]


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _raise_for_failure(result: AIResult) -> None:
    if not result.success:
        error_type = result.error_type.value if result.error_type else None
        raise AIServiceError(result.error or "AI request failed", error_type=error_type)


class ChatService:
    """Chat service: provider calls go through AIService, history through PersistenceService"""

    def __init__(self, persistence: PersistenceService, ai_service: AIService):
        self.persistence = persistence
        self.ai_service = ai_service

    @log_print
    async def send_message(self, data: ChatMessageRequest, user_id: str):
        """
        Generate code for a natural-language request.

        With a project id the project summary and its files become prompt
        context, and the exchange is stored as a conversation. A failed
        save is logged; the generated code is still returned.
        """
        project_id = None
        project_context = ""
        existing_files = []

        if data.project_id:
            project_id = parse_uuid(data.project_id)
            project = await self.persistence.get_project(project_id, user_id)
            if project is None:
                raise NotFoundError("Project not found", resource_type="project", resource_id=data.project_id)
            project_context = build_project_context(project.name, project.description, project.template_used)
            existing_files = await self.persistence.get_project_files(project_id, user_id)
            logger.info(f"Found {len(existing_files)} existing files for context")

        result = await self.ai_service.generate_code(data.message, project_context, existing_files)
        _raise_for_failure(result)

        conversation_id: Optional[str] = None
        if project_id is not None:
            try:
                conversation = await self.persistence.save_conversation(
                    project_id,
                    user_id,
                    data.message,
                    result.content,
                    ai_model=result.model,
                    tokens_used=result.usage.total_tokens,
                )
                if conversation is not None:
                    conversation_id = str(conversation.id)
            except Exception as e:
                logger.error(f"Failed to save conversation for project {project_id}: {e}", exc_info=True)

        return BaseResponse.success(data={
            "response": result.content,
            "usage": result.usage.to_dict(),
            "model": result.model,
            "project_id": data.project_id,
            "conversation_id": conversation_id,
            "timestamp": _timestamp(),
        })

    @log_print
    async def explain_code(self, data: ExplainCodeRequest):
        result = await self.ai_service.explain_code(data.code, data.language)
        _raise_for_failure(result)
        return BaseResponse.success(data={
            "explanation": result.content,
            "language": data.language,
            "usage": result.usage.to_dict(),
            "timestamp": _timestamp(),
        })

    @log_print
    async def suggest_improvements(self, data: ImproveCodeRequest):
        result = await self.ai_service.suggest_improvements(data.code, data.context)
        _raise_for_failure(result)
        return BaseResponse.success(data={
            "suggestions": result.content,
            "usage": result.usage.to_dict(),
            "timestamp": _timestamp(),
        })

    @log_print
    async def generate_tests(self, data: GenerateTestsRequest):
        result = await self.ai_service.generate_tests(data.code, data.framework)
        _raise_for_failure(result)
        return BaseResponse.success(data={
            "tests": result.content,
            "framework": data.framework,
            "usage": result.usage.to_dict(),
            "timestamp": _timestamp(),
        })

    @log_print
    async def get_conversations(self, project_id: str, user_id: str, limit: Optional[int] = None):
        """Conversation history, oldest first; limit defaults to 50 and is capped at 100"""
        pid = parse_uuid(project_id)
        if await self.persistence.get_project(pid, user_id) is None:
            raise NotFoundError("Project not found", resource_type="project", resource_id=project_id)

        conversations = await self.persistence.get_conversations(pid, user_id, clamp_limit(limit))
        items = [ConversationResponse.model_validate(c).model_dump(mode="json") for c in conversations]
        return BaseResponse.success(data={
            "items": items,
            "total": len(items),
            "project_id": project_id,
        })

    def get_status(self):
        stats = self.ai_service.get_usage_stats()
        return BaseResponse.success(data={
            "configured": stats["configured"],
            "model": stats["model"],
            "features": stats["features"],
            "endpoints": list(CHAT_ENDPOINTS),
        })
