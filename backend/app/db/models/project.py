"""
Project Model

A user's collection of generated source files.
"""

import enum

from sqlalchemy import Column, String, Text, JSON, Index

from app.db.base import Base, BaseModel, TimestampMixin


class ProjectStatus(str, enum.Enum):
    """Lifecycle status; deleting a project only flips it to DELETED."""
    ACTIVE = "active"
    DELETED = "deleted"


class Project(Base, BaseModel, TimestampMixin):
    """
    Projects table

    Soft-deleted rows keep their files and conversations.
    """
    __tablename__ = "projects"

    user_id = Column(String(255), nullable=False, comment="Owner identity")
    name = Column(String(255), nullable=False, comment="Project name")
    description = Column(Text, nullable=False, default="", comment="Project description")
    template_used = Column(String(100), nullable=True, comment="Scaffold template used at creation")
    status = Column(String(20), nullable=False, default=ProjectStatus.ACTIVE.value, comment="active / deleted")
    settings = Column(JSON, nullable=True, comment="Additional project configuration")

    __table_args__ = (
        Index("idx_projects_user_status", "user_id", "status"),
        Index("idx_projects_updated_at", "updated_at"),
    )

    def __repr__(self):
        return f"<Project(id={self.id}, name={self.name!r}, status={self.status})>"
