"""
Project file model

Stores file contents generated for a project, one row per path.
"""

from sqlalchemy import Column, String, Text, Integer, ForeignKey, UniqueConstraint, Uuid

from app.db.base import Base, BaseModel, TimestampMixin


class ProjectFile(Base, BaseModel, TimestampMixin):
    """
    Project files table

    (project_id, file_path) is unique; saving an existing path overwrites it.
    """
    __tablename__ = "project_files"

    project_id = Column(Uuid, ForeignKey("projects.id"), nullable=False, index=True, comment="Owning project")
    file_path = Column(String(1024), nullable=False, comment="Path within the project")
    file_name = Column(String(255), nullable=False, comment="Display name")
    content = Column(Text, nullable=False, default="", comment="File content")
    file_type = Column(String(50), nullable=False, default="text", comment="Content type tag")
    size_bytes = Column(Integer, nullable=False, default=0, comment="UTF-8 byte length of content")

    __table_args__ = (
        UniqueConstraint("project_id", "file_path", name="uq_project_files_project_path"),
    )

    def __repr__(self):
        return f"<ProjectFile(project_id={self.project_id}, file_path={self.file_path!r}, size={self.size_bytes})>"
