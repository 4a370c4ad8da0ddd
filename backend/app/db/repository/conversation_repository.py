"""
Conversation repository implementation

Conversations are append-only; history reads join through projects for
ownership.
"""

from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models import Conversation, Project, ProjectStatus
from app.db.repository.base_repository import BaseRepository

DEFAULT_HISTORY_LIMIT = 50
MAX_HISTORY_LIMIT = 100


def clamp_limit(limit) -> int:
    """Bound a requested page size to 1..MAX_HISTORY_LIMIT; non-positive means default"""
    if limit is None or limit <= 0:
        return DEFAULT_HISTORY_LIMIT
    return min(limit, MAX_HISTORY_LIMIT)


class ConversationRepository(BaseRepository[Conversation, dict]):
    """
    Conversation data access layer
    """

    def __init__(self):
        super().__init__(Conversation)

    async def append(
        self,
        session: AsyncSession,
        project_id,
        user_id: str,
        message: str,
        response: str,
        ai_model: str,
        tokens_used: int = 0,
    ) -> Conversation:
        """Insert a conversation row"""
        return await self.create(
            session,
            {
                "project_id": project_id,
                "user_id": user_id,
                "message": message,
                "response": response,
                "ai_model": ai_model,
                "tokens_used": tokens_used or 0,
            },
        )

    async def get_recent(
        self,
        session: AsyncSession,
        project_id,
        user_id: str,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> List[Conversation]:
        """
        Latest `limit` conversations of an owned project.

        Returns:
            List of conversations (oldest first)
        """
        # Newest N by index order, then flip to chronological
        stmt = (
            select(Conversation)
            .join(Project, Conversation.project_id == Project.id)
            .where(
                Conversation.project_id == project_id,
                Project.user_id == user_id,
                Project.status == ProjectStatus.ACTIVE.value,
            )
            .order_by(Conversation.created_at.desc())
            .limit(clamp_limit(limit))
        )
        result = await session.execute(stmt)
        return list(reversed(result.scalars().all()))
