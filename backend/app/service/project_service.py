"""
Project Service

Business logic layer - project CRUD and project files
"""

import logging
from typing import Any, Dict

from app.config.logging_config import log_print
from app.core.project_templates import get_template_files
from app.db.persistence_service import PersistenceService
from app.db.query_builder import EmptyUpdateError
from app.db.schemas import (
    ConversationResponse,
    ProjectCreate,
    ProjectFileResponse,
    ProjectFileSave,
    ProjectResponse,
    ProjectSummaryResponse,
    ProjectUpdate,
)
from app.utils.exceptions import NotFoundError, ValidationException
from app.utils.model.response_model import BaseResponse, ListResponse
from app.utils.validators import parse_uuid

logger = logging.getLogger(__name__)

NO_VALID_FIELDS = "No valid fields to update"


def _dump(schema, obj) -> Dict[str, Any]:
    return schema.model_validate(obj).model_dump(mode="json")


class ProjectService:
    """
    Project service

    Expected failures (bad identifiers, missing or foreign projects) are
    raised as business exceptions and rendered by the global handlers.
    """

    def __init__(self, persistence: PersistenceService):
        self.persistence = persistence

    @log_print
    async def list_projects(self, user_id: str):
        """Active projects of the caller with file and conversation counts"""
        projects = await self.persistence.get_projects(user_id)
        items = [_dump(ProjectSummaryResponse, p) for p in projects]
        return ListResponse.success(items=items)

    @log_print
    async def get_project(self, project_id: str, user_id: str):
        """Project with its files and latest conversations"""
        pid = parse_uuid(project_id)
        detail = await self.persistence.get_project_detail(pid, user_id)
        if detail is None:
            raise NotFoundError("Project not found", resource_type="project", resource_id=project_id)

        files = [_dump(ProjectFileResponse, f) for f in detail.files]
        conversations = [_dump(ConversationResponse, c) for c in detail.conversations]
        return BaseResponse.success(data={
            "project": _dump(ProjectResponse, detail.project),
            "files": files,
            "conversations": conversations,
            "stats": {
                "file_count": len(files),
                "conversation_count": len(conversations),
            },
        })

    @log_print
    async def create_project(self, data: ProjectCreate, user_id: str):
        """
        Create a project; a known template seeds its starter files.

        Template files are saved one by one. A file that fails to save is
        logged and skipped, the project itself stays created.
        """
        project = await self.persistence.create_project(
            user_id=user_id,
            name=data.name,
            description=data.description,
            template=data.template,
        )
        payload = _dump(ProjectResponse, project)

        if data.template:
            created_files = []
            for template_file in get_template_files(data.template):
                try:
                    saved = await self.persistence.save_project_file(
                        project.id,
                        user_id,
                        template_file.path,
                        template_file.name,
                        template_file.content,
                        template_file.type,
                    )
                except Exception as e:
                    logger.error(f"Error creating template file {template_file.path}: {e}", exc_info=True)
                    continue
                if saved is not None:
                    created_files.append(_dump(ProjectFileResponse, saved))
            payload["files"] = created_files

        logger.info(f"Project created: {project.id} (template={data.template})")
        return BaseResponse.created(data=payload, message="Project created successfully")

    @log_print
    async def update_project(self, project_id: str, data: ProjectUpdate, user_id: str):
        """Partial update restricted to name, description, status and settings"""
        pid = parse_uuid(project_id)
        changes = data.changes()
        if not changes:
            raise ValidationException(NO_VALID_FIELDS)

        try:
            project = await self.persistence.update_project(pid, user_id, changes)
        except EmptyUpdateError:
            raise ValidationException(NO_VALID_FIELDS)

        if project is None:
            raise NotFoundError("Project not found", resource_type="project", resource_id=project_id)
        return BaseResponse.success(data=_dump(ProjectResponse, project), message="Project updated successfully")

    @log_print
    async def delete_project(self, project_id: str, user_id: str):
        """Soft delete; files and conversations are kept"""
        pid = parse_uuid(project_id)
        project = await self.persistence.delete_project(pid, user_id)
        if project is None:
            raise NotFoundError("Project not found", resource_type="project", resource_id=project_id)
        return BaseResponse.success(data=_dump(ProjectResponse, project), message="Project deleted successfully")

    @log_print
    async def list_files(self, project_id: str, user_id: str):
        pid = parse_uuid(project_id)
        if await self.persistence.get_project(pid, user_id) is None:
            raise NotFoundError("Project not found", resource_type="project", resource_id=project_id)
        files = await self.persistence.get_project_files(pid, user_id)
        return ListResponse.success(items=[_dump(ProjectFileResponse, f) for f in files])

    @log_print
    async def save_file(self, project_id: str, data: ProjectFileSave, user_id: str):
        """Create or overwrite the file at data.file_path"""
        pid = parse_uuid(project_id)
        saved = await self.persistence.save_project_file(
            pid,
            user_id,
            data.file_path,
            data.file_name,
            data.content,
            data.file_type,
        )
        if saved is None:
            raise NotFoundError("Project not found", resource_type="project", resource_id=project_id)
        return BaseResponse.success(data=_dump(ProjectFileResponse, saved), message="File saved successfully")

    @log_print
    async def get_file(self, project_id: str, file_path: str, user_id: str):
        pid = parse_uuid(project_id)
        project_file = await self.persistence.get_project_file(pid, file_path, user_id)
        if project_file is None:
            raise NotFoundError("File not found", resource_type="file", resource_id=file_path)
        return BaseResponse.success(data=_dump(ProjectFileResponse, project_file))

    @log_print
    async def delete_file(self, project_id: str, file_path: str, user_id: str):
        pid = parse_uuid(project_id)
        deleted = await self.persistence.delete_project_file(pid, file_path, user_id)
        if deleted is None:
            raise NotFoundError("File not found", resource_type="file", resource_id=file_path)
        return BaseResponse.success(data=_dump(ProjectFileResponse, deleted), message="File deleted successfully")
