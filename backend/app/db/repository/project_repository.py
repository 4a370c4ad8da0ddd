"""
Project Repository

Data access layer - Project queries. Every lookup is scoped to the owner.
"""

from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.base import utc_now
from app.db.models import Conversation, Project, ProjectFile, ProjectStatus
from app.db.query_builder import build_partial_update
from app.db.repository.base_repository import BaseRepository


class ProjectRepository(BaseRepository[Project, Dict[str, Any]]):
    """Project repository with ownership-scoped queries"""

    def __init__(self):
        super().__init__(Project)

    async def create_project(
        self,
        session: AsyncSession,
        user_id: str,
        name: str,
        description: str = "",
        template: Optional[str] = None,
    ) -> Project:
        """Insert a project and return the persisted row"""
        return await self.create(
            session,
            {
                "user_id": user_id,
                "name": name,
                "description": description,
                "template_used": template,
                "status": ProjectStatus.ACTIVE.value,
            },
        )

    async def list_active_with_stats(self, session: AsyncSession, user_id: str) -> List[Dict[str, Any]]:
        """
        Active projects of a user, most recently updated first.

        Each entry is the project's columns plus file_count,
        conversation_count and last_conversation.
        """
        file_stats = (
            select(ProjectFile.project_id, func.count().label("file_count"))
            .group_by(ProjectFile.project_id)
            .subquery()
        )
        conv_stats = (
            select(
                Conversation.project_id,
                func.count().label("conversation_count"),
                func.max(Conversation.created_at).label("last_conversation"),
            )
            .group_by(Conversation.project_id)
            .subquery()
        )
        stmt = (
            select(
                Project,
                func.coalesce(file_stats.c.file_count, 0).label("file_count"),
                func.coalesce(conv_stats.c.conversation_count, 0).label("conversation_count"),
                conv_stats.c.last_conversation,
            )
            .outerjoin(file_stats, Project.id == file_stats.c.project_id)
            .outerjoin(conv_stats, Project.id == conv_stats.c.project_id)
            .where(Project.user_id == user_id, Project.status == ProjectStatus.ACTIVE.value)
            .order_by(Project.updated_at.desc())
        )
        result = await session.execute(stmt)
        return [
            {
                **project.to_dict(),
                "file_count": int(file_count),
                "conversation_count": int(conversation_count),
                "last_conversation": last_conversation,
            }
            for project, file_count, conversation_count, last_conversation in result.all()
        ]

    async def get_active(self, session: AsyncSession, project_id, user_id: str) -> Optional[Project]:
        """The project if it exists, belongs to user_id and is active; otherwise None"""
        stmt = select(Project).where(
            Project.id == project_id,
            Project.user_id == user_id,
            Project.status == ProjectStatus.ACTIVE.value,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def update_fields(
        self,
        session: AsyncSession,
        project_id,
        user_id: str,
        changes: Mapping[str, Any],
    ) -> Optional[Project]:
        """
        Apply a pre-filtered partial update.

        Raises:
            EmptyUpdateError: If changes is empty; no statement is issued
        """
        partial = build_partial_update(
            Project,
            changes,
            selectors=(("id", project_id), ("user_id", user_id)),
        )
        result = await session.execute(partial.statement)
        return result.scalar_one_or_none()

    async def soft_delete(self, session: AsyncSession, project_id, user_id: str) -> Optional[Project]:
        """Mark the project deleted; children are left untouched"""
        return await self.update_fields(
            session, project_id, user_id, {"status": ProjectStatus.DELETED}
        )

    async def touch(self, session: AsyncSession, project_id) -> None:
        """Bump updated_at after a write to one of the project's children"""
        await session.execute(
            update(Project)
            .where(Project.id == project_id)
            .values(updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
