"""
Persistence service

The storage facade used by the request services. Each public method is one
unit of work: child writes and the parent project's updated_at bump commit
together or not at all.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from app.db.models import Conversation, Project, ProjectFile
from app.db.query_builder import EmptyUpdateError
from app.db.repository import (
    ConversationRepository,
    DEFAULT_HISTORY_LIMIT,
    ProjectFileRepository,
    ProjectRepository,
)
from app.db.session import Database

logger = logging.getLogger(__name__)

DEFAULT_AI_MODEL = "claude-3-5-sonnet"


@dataclass
class ProjectDetail:
    """A project together with its files and recent conversations."""
    project: Project
    files: List[ProjectFile] = field(default_factory=list)
    conversations: List[Conversation] = field(default_factory=list)


class PersistenceService:
    """
    Typed operations over projects, project files and conversations.

    "Not found" and "not yours" are deliberately indistinguishable: both
    come back as None.
    """

    def __init__(self, database: Database):
        self.database = database
        self.projects = ProjectRepository()
        self.files = ProjectFileRepository()
        self.conversations = ConversationRepository()

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------

    async def create_project(
        self,
        user_id: str,
        name: str,
        description: str = "",
        template: Optional[str] = None,
    ) -> Project:
        async with self.database.session_scope() as session:
            return await self.projects.create_project(session, user_id, name, description, template)

    async def get_projects(self, user_id: str) -> List[Dict[str, Any]]:
        async with self.database.session_scope() as session:
            return await self.projects.list_active_with_stats(session, user_id)

    async def get_project(self, project_id, user_id: str) -> Optional[Project]:
        async with self.database.session_scope() as session:
            return await self.projects.get_active(session, project_id, user_id)

    async def get_project_detail(
        self,
        project_id,
        user_id: str,
        conversation_limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> Optional[ProjectDetail]:
        """Project, files and latest conversations read in a single transaction."""
        async with self.database.session_scope() as session:
            project = await self.projects.get_active(session, project_id, user_id)
            if project is None:
                return None
            return ProjectDetail(
                project=project,
                files=await self.files.list_for_project(session, project_id, user_id),
                conversations=await self.conversations.get_recent(session, project_id, user_id, conversation_limit),
            )

    async def update_project(self, project_id, user_id: str, changes: Mapping[str, Any]) -> Optional[Project]:
        """
        Apply a partial update.

        Precondition: ``changes`` is already filtered to the updatable fields.

        Raises:
            EmptyUpdateError: If changes is empty (checked before touching storage)
        """
        if not changes:
            raise EmptyUpdateError()
        async with self.database.session_scope() as session:
            return await self.projects.update_fields(session, project_id, user_id, changes)

    async def delete_project(self, project_id, user_id: str) -> Optional[Project]:
        """Soft delete; files and conversations are kept."""
        async with self.database.session_scope() as session:
            return await self.projects.soft_delete(session, project_id, user_id)

    # ------------------------------------------------------------------
    # Conversations
    # ------------------------------------------------------------------

    async def save_conversation(
        self,
        project_id,
        user_id: str,
        message: str,
        response: str,
        ai_model: str = DEFAULT_AI_MODEL,
        tokens_used: int = 0,
    ) -> Optional[Conversation]:
        """Append a conversation and bump the project; None if the project is not the caller's."""
        async with self.database.session_scope() as session:
            if await self.projects.get_active(session, project_id, user_id) is None:
                return None
            conversation = await self.conversations.append(
                session, project_id, user_id, message, response, ai_model, tokens_used
            )
            await self.projects.touch(session, project_id)
            return conversation

    async def get_conversations(self, project_id, user_id: str, limit: int = DEFAULT_HISTORY_LIMIT) -> List[Conversation]:
        async with self.database.session_scope() as session:
            return await self.conversations.get_recent(session, project_id, user_id, limit)

    # ------------------------------------------------------------------
    # Project files
    # ------------------------------------------------------------------

    async def save_project_file(
        self,
        project_id,
        user_id: str,
        file_path: str,
        file_name: str,
        content: str,
        file_type: str = "text",
    ) -> Optional[ProjectFile]:
        """Upsert a file by path and bump the project; None if the project is not the caller's."""
        async with self.database.session_scope() as session:
            if await self.projects.get_active(session, project_id, user_id) is None:
                return None
            project_file = await self.files.upsert(session, project_id, file_path, file_name, content, file_type)
            await self.projects.touch(session, project_id)
            return project_file

    async def get_project_files(self, project_id, user_id: str) -> List[ProjectFile]:
        async with self.database.session_scope() as session:
            return await self.files.list_for_project(session, project_id, user_id)

    async def get_project_file(self, project_id, file_path: str, user_id: str) -> Optional[ProjectFile]:
        async with self.database.session_scope() as session:
            return await self.files.get_by_path(session, project_id, file_path, user_id)

    async def delete_project_file(self, project_id, file_path: str, user_id: str) -> Optional[ProjectFile]:
        async with self.database.session_scope() as session:
            deleted = await self.files.delete_by_path(session, project_id, file_path, user_id)
            if deleted is not None:
                await self.projects.touch(session, project_id)
            return deleted

    # ------------------------------------------------------------------
    # Health
    # ------------------------------------------------------------------

    async def health_check(self) -> Dict[str, Any]:
        return await self.database.health_check()

    async def ping(self):
        await self.database.ping()
