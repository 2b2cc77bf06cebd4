"""Project API controller with FastAPI endpoints."""

import logging
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.dependencies import get_current_user, get_db
from app.domains.project.service import ProjectService
from app.schemas.base import ResponseSchema
from app.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate
from app.shared.pagination import PaginatedResponse, PaginationParams
from models.user import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects", tags=["projects"])


def get_pagination(
    page: int = Query(1, ge=1),
    size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
) -> PaginationParams:
    return PaginationParams(page=page, size=size)


@router.post("/", response_model=ResponseSchema, status_code=201)
async def create_project(
    project_data: ProjectCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create a new project owned by the current user."""

    service = ProjectService(db)
    project = await service.create_project(project_data, current_user.id)

    return ResponseSchema(
        status="success",
        message="Project created successfully",
        data=project.model_dump(mode="json"),
    )


@router.get("/", response_model=PaginatedResponse[ProjectResponse])
async def get_accessible_projects(
    pagination: PaginationParams = Depends(get_pagination),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Projects the current user owns or is a member of."""
    return await ProjectService(db).get_accessible_projects(current_user.id, pagination)


@router.get("/owned", response_model=PaginatedResponse[ProjectResponse])
async def get_owned_projects(
    pagination: PaginationParams = Depends(get_pagination),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Projects owned by the current user."""
    return await ProjectService(db).get_owned_projects(current_user.id, pagination)


@router.get("/member", response_model=PaginatedResponse[ProjectResponse])
async def get_member_projects(
    pagination: PaginationParams = Depends(get_pagination),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Projects where the current user is a member but not the owner."""
    return await ProjectService(db).get_member_projects(current_user.id, pagination)


@router.get("/{project_id}", response_model=ResponseSchema)
async def get_project(
    project_id: UUID = Path(..., description="Project ID"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get a specific project by ID."""

    project = await ProjectService(db).get_project(project_id, current_user.id)

    return ResponseSchema(
        status="success",
        message="Project retrieved successfully",
        data=project.model_dump(mode="json"),
    )


@router.put("/{project_id}", response_model=ResponseSchema)
async def update_project(
    project_id: UUID = Path(..., description="Project ID"),
    project_data: ProjectUpdate = Body(...),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Update a specific project."""

    project = await ProjectService(db).update_project(project_id, project_data, current_user.id)

    return ResponseSchema(
        status="success",
        message="Project updated successfully",
        data=project.model_dump(mode="json"),
    )


@router.delete("/{project_id}", response_model=ResponseSchema)
async def delete_project(
    project_id: UUID = Path(..., description="Project ID"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete a project and everything in it."""

    await ProjectService(db).delete_project(project_id, current_user.id)

    return ResponseSchema(status="success", message="Project deleted successfully", data=None)


@router.post("/{project_id}/members/{user_id}", response_model=ResponseSchema)
async def add_member(
    project_id: UUID = Path(..., description="Project ID"),
    user_id: UUID = Path(..., description="User to add"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Add a member to a project."""

    project = await ProjectService(db).add_member(project_id, user_id, current_user.id)

    return ResponseSchema(
        status="success",
        message="Member added successfully",
        data=project.model_dump(mode="json"),
    )


@router.delete("/{project_id}/members/{user_id}", response_model=ResponseSchema)
async def remove_member(
    project_id: UUID = Path(..., description="Project ID"),
    user_id: UUID = Path(..., description="User to remove"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Remove a member from a project."""

    project = await ProjectService(db).remove_member(project_id, user_id, current_user.id)

    return ResponseSchema(
        status="success",
        message="Member removed successfully",
        data=project.model_dump(mode="json"),
    )


@router.post("/{project_id}/leave", response_model=ResponseSchema)
async def leave_project(
    project_id: UUID = Path(..., description="Project ID"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Leave a project the current user is a member of."""

    await ProjectService(db).leave_project(project_id, current_user.id)

    return ResponseSchema(status="success", message="Left project successfully", data=None)
