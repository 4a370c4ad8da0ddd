"""
Project file repository implementation

Reads join through projects so a file is only visible to the owner of an
active project.
"""

from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.base import utc_now
from app.db.models import Project, ProjectFile, ProjectStatus
from app.db.repository.base_repository import BaseRepository

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def content_size(content: str) -> int:
    """Size of the content as stored, in UTF-8 bytes"""
    return len(content.encode("utf-8"))


class ProjectFileRepository(BaseRepository[ProjectFile, dict]):
    """
    Project file data access layer
    """

    def __init__(self):
        super().__init__(ProjectFile)

    def _owned(self, project_id, user_id: str):
        return (
            select(ProjectFile)
            .join(Project, ProjectFile.project_id == Project.id)
            .where(
                ProjectFile.project_id == project_id,
                Project.user_id == user_id,
                Project.status == ProjectStatus.ACTIVE.value,
            )
        )

    async def upsert(
        self,
        session: AsyncSession,
        project_id,
        file_path: str,
        file_name: str,
        content: str,
        file_type: str = "text",
    ) -> ProjectFile:
        """
        Insert the file, or overwrite the existing row for (project_id, file_path).

        size_bytes is always derived from content here.
        """
        dialect = session.bind.dialect.name
        try:
            insert = _UPSERT_DIALECTS[dialect]
        except KeyError:
            raise NotImplementedError(f"Upsert is not supported for dialect '{dialect}'") from None

        now = utc_now()
        stmt = insert(ProjectFile).values(
            project_id=project_id,
            file_path=file_path,
            file_name=file_name,
            content=content,
            file_type=file_type,
            size_bytes=content_size(content),
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[ProjectFile.project_id, ProjectFile.file_path],
            set_={
                "content": stmt.excluded.content,
                "file_name": stmt.excluded.file_name,
                "file_type": stmt.excluded.file_type,
                "size_bytes": stmt.excluded.size_bytes,
                "updated_at": stmt.excluded.updated_at,
            },
        ).returning(ProjectFile)

        result = await session.scalars(stmt, execution_options={"populate_existing": True})
        return result.one()

    async def list_for_project(self, session: AsyncSession, project_id, user_id: str) -> List[ProjectFile]:
        """All files of the project ordered by path"""
        stmt = self._owned(project_id, user_id).order_by(ProjectFile.file_path)
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_path(self, session: AsyncSession, project_id, file_path: str, user_id: str) -> Optional[ProjectFile]:
        """Single file by path"""
        stmt = self._owned(project_id, user_id).where(ProjectFile.file_path == file_path)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_by_path(self, session: AsyncSession, project_id, file_path: str, user_id: str) -> Optional[ProjectFile]:
        """Hard-delete a file; returns the removed row or None"""
        file = await self.get_by_path(session, project_id, file_path, user_id)
        if file is None:
            return None
        await session.execute(
            delete(ProjectFile).where(ProjectFile.id == file.id).execution_options(synchronize_session=False)
        )
        return file
