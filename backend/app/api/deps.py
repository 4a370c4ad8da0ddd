"""
Request dependencies

Services are built per request from the instances the application owns
(app.state), so tests can inject their own database and AI gateway.
"""

from fastapi import Depends, Header, Request

from app.core.ai_service import AIService
from app.db.persistence_service import PersistenceService
from app.db.session import Database
from app.service.chat_service import ChatService
from app.service.health_service import HealthService
from app.service.project_service import ProjectService

DEFAULT_USER_ID = "demo-user"


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_ai_service(request: Request) -> AIService:
    return request.app.state.ai_service


def get_user_id(request: Request, x_user_id: str = Header(None, alias="X-User-Id")) -> str:
    """Caller identity from the X-User-Id header; falls back to the configured default user"""
    if x_user_id and x_user_id.strip():
        return x_user_id.strip()
    return getattr(request.app.state, "default_user_id", DEFAULT_USER_ID)


def get_persistence(database: Database = Depends(get_database)) -> PersistenceService:
    return PersistenceService(database)


def get_project_service(persistence: PersistenceService = Depends(get_persistence)) -> ProjectService:
    return ProjectService(persistence)


def get_chat_service(
    persistence: PersistenceService = Depends(get_persistence),
    ai_service: AIService = Depends(get_ai_service),
) -> ChatService:
    return ChatService(persistence, ai_service)


def get_health_service(
    request: Request,
    database: Database = Depends(get_database),
    ai_service: AIService = Depends(get_ai_service),
) -> HealthService:
    state = request.app.state
    return HealthService(
        database,
        ai_service,
        version=state.version,
        environment=state.environment,
        started_at=state.started_at,
    )
