"""Task list API controller with FastAPI endpoints."""

from uuid import UUID

from fastapi import APIRouter, Body, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_current_user, get_db
from app.domains.task_list.service import TaskListService
from app.schemas.base import ResponseSchema
from app.schemas.task_list import TaskListCreate, TaskListUpdate
from models.user import User

router = APIRouter(prefix="/api/tasklists", tags=["task lists"])


@router.post("/", response_model=ResponseSchema, status_code=201)
async def create_task_list(
    task_list_data: TaskListCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create a task list inside a project."""

    task_list = await TaskListService(db).create_task_list(task_list_data, current_user.id)

    return ResponseSchema(
        status="success",
        message="Task list created successfully",
        data=task_list.model_dump(mode="json"),
    )


@router.get("/project/{project_id}", response_model=ResponseSchema)
async def get_task_lists_by_project(
    project_id: UUID = Path(..., description="Project ID"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get the task lists of a project in board order."""

    task_lists = await TaskListService(db).get_task_lists_by_project(project_id, current_user.id)

    return ResponseSchema(
        status="success",
        message="Task lists retrieved successfully",
        data={"task_lists": [task_list.model_dump(mode="json") for task_list in task_lists]},
    )


@router.get("/{task_list_id}", response_model=ResponseSchema)
async def get_task_list(
    task_list_id: UUID = Path(..., description="Task list ID"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get a task list together with its tasks."""

    task_list = await TaskListService(db).get_task_list(task_list_id, current_user.id)

    return ResponseSchema(
        status="success",
        message="Task list retrieved successfully",
        data=task_list.model_dump(mode="json"),
    )


@router.put("/{task_list_id}", response_model=ResponseSchema)
async def update_task_list(
    task_list_id: UUID = Path(..., description="Task list ID"),
    task_list_data: TaskListUpdate = Body(...),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Rename or reposition a task list."""

    task_list = await TaskListService(db).update_task_list(
        task_list_id, task_list_data, current_user.id
    )

    return ResponseSchema(
        status="success",
        message="Task list updated successfully",
        data=task_list.model_dump(mode="json"),
    )


@router.delete("/{task_list_id}", response_model=ResponseSchema)
async def delete_task_list(
    task_list_id: UUID = Path(..., description="Task list ID"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete a task list and its tasks."""

    await TaskListService(db).delete_task_list(task_list_id, current_user.id)

    return ResponseSchema(status="success", message="Task list deleted successfully", data=None)
