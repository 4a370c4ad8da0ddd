"""
Chat API Router

Code generation and conversation history routes
"""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from app.api.deps import get_chat_service, get_user_id
from app.db.schemas import (
    ChatMessageRequest,
    ExplainCodeRequest,
    GenerateTestsRequest,
    ImproveCodeRequest,
)
from app.service.chat_service import ChatService

chat_router = APIRouter(prefix="/chat", tags=["chat"])


@chat_router.post(
    "/message",
    summary="Generate code from natural language",
    operation_id="chat_message"
)
async def send_message(
    data: ChatMessageRequest,
    user_id: str = Depends(get_user_id),
    service: ChatService = Depends(get_chat_service),
):
    return await service.send_message(data, user_id)


@chat_router.post(
    "/explain",
    summary="Explain code",
    operation_id="explain_code"
)
async def explain_code(
    data: ExplainCodeRequest,
    service: ChatService = Depends(get_chat_service),
):
    return await service.explain_code(data)


@chat_router.post(
    "/improve",
    summary="Suggest code improvements",
    operation_id="improve_code"
)
async def improve_code(
    data: ImproveCodeRequest,
    service: ChatService = Depends(get_chat_service),
):
    return await service.suggest_improvements(data)


@chat_router.post(
    "/tests",
    summary="Generate unit tests",
    operation_id="generate_tests"
)
async def generate_tests(
    data: GenerateTestsRequest,
    service: ChatService = Depends(get_chat_service),
):
    return await service.generate_tests(data)


@chat_router.get(
    "/conversations/{project_id}",
    summary="Get conversation history",
    operation_id="get_conversations"
)
async def get_conversations(
    project_id: str = Path(..., description="Project ID"),
    limit: Optional[int] = Query(None, description="Maximum entries, default 50, capped at 100"),
    user_id: str = Depends(get_user_id),
    service: ChatService = Depends(get_chat_service),
):
    return await service.get_conversations(project_id, user_id, limit)


@chat_router.get(
    "/status",
    summary="AI service status",
    operation_id="chat_status"
)
async def chat_status(service: ChatService = Depends(get_chat_service)):
    return service.get_status()
