"""
Project API Router

Project CRUD and project file routes
"""

from fastapi import APIRouter, Body, Depends, Path

from app.api.deps import get_project_service, get_user_id
from app.db.schemas import ProjectCreate, ProjectFileDelete, ProjectFileSave, ProjectUpdate
from app.service.project_service import ProjectService

project_router = APIRouter(prefix="/projects", tags=["projects"])


@project_router.get(
    "",
    summary="List projects",
    operation_id="list_projects"
)
async def list_projects(
    user_id: str = Depends(get_user_id),
    service: ProjectService = Depends(get_project_service),
):
    """Active projects of the caller, most recently updated first"""
    return await service.list_projects(user_id)


@project_router.post(
    "",
    status_code=201,
    summary="Create project",
    operation_id="create_project"
)
async def create_project(
    data: ProjectCreate,
    user_id: str = Depends(get_user_id),
    service: ProjectService = Depends(get_project_service),
):
    """Create a project, optionally scaffolded from a template"""
    return await service.create_project(data, user_id)


@project_router.get(
    "/{project_id}",
    summary="Get project",
    operation_id="get_project"
)
async def get_project(
    project_id: str = Path(..., description="Project ID"),
    user_id: str = Depends(get_user_id),
    service: ProjectService = Depends(get_project_service),
):
    """Project with its files, recent conversations and stats"""
    return await service.get_project(project_id, user_id)


@project_router.put(
    "/{project_id}",
    summary="Update project",
    operation_id="update_project"
)
async def update_project(
    project_id: str = Path(..., description="Project ID"),
    data: ProjectUpdate = Body(...),
    user_id: str = Depends(get_user_id),
    service: ProjectService = Depends(get_project_service),
):
    return await service.update_project(project_id, data, user_id)


@project_router.delete(
    "/{project_id}",
    summary="Delete project",
    operation_id="delete_project"
)
async def delete_project(
    project_id: str = Path(..., description="Project ID"),
    user_id: str = Depends(get_user_id),
    service: ProjectService = Depends(get_project_service),
):
    """Soft delete"""
    return await service.delete_project(project_id, user_id)


@project_router.get(
    "/{project_id}/files",
    summary="List project files",
    operation_id="list_project_files"
)
async def list_files(
    project_id: str = Path(..., description="Project ID"),
    user_id: str = Depends(get_user_id),
    service: ProjectService = Depends(get_project_service),
):
    return await service.list_files(project_id, user_id)


@project_router.post(
    "/{project_id}/files",
    summary="Save project file",
    operation_id="save_project_file"
)
async def save_file(
    data: ProjectFileSave,
    project_id: str = Path(..., description="Project ID"),
    user_id: str = Depends(get_user_id),
    service: ProjectService = Depends(get_project_service),
):
    """Create the file, or overwrite it if the path already exists"""
    return await service.save_file(project_id, data, user_id)


@project_router.delete(
    "/{project_id}/files",
    summary="Delete project file",
    operation_id="delete_project_file"
)
async def delete_file(
    data: ProjectFileDelete,
    project_id: str = Path(..., description="Project ID"),
    user_id: str = Depends(get_user_id),
    service: ProjectService = Depends(get_project_service),
):
    return await service.delete_file(project_id, data.file_path, user_id)


@project_router.get(
    "/{project_id}/files/{file_path:path}",
    summary="Get project file",
    operation_id="get_project_file"
)
async def get_file(
    project_id: str = Path(..., description="Project ID"),
    file_path: str = Path(..., description="File path within the project"),
    user_id: str = Depends(get_user_id),
    service: ProjectService = Depends(get_project_service),
):
    return await service.get_file(project_id, file_path, user_id)
