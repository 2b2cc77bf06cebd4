"""Task API controller with FastAPI endpoints."""

from uuid import UUID

from fastapi import APIRouter, Body, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_current_user, get_db
from app.domains.task.service import TaskService
from app.schemas.base import ResponseSchema
from app.schemas.task import TaskCreate, TaskMove, TaskUpdate
from models.user import User

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.post("/", response_model=ResponseSchema, status_code=201)
async def create_task(
    task_data: TaskCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create a task in a task list."""

    task = await TaskService(db).create_task(task_data, current_user.id)

    return ResponseSchema(
        status="success",
        message="Task created successfully",
        data=task.model_dump(mode="json"),
    )


@router.get("/tasklist/{task_list_id}", response_model=ResponseSchema)
async def get_tasks_by_task_list(
    task_list_id: UUID = Path(..., description="Task list ID"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get the tasks of a task list in order."""

    tasks = await TaskService(db).get_tasks_by_task_list(task_list_id, current_user.id)

    return ResponseSchema(
        status="success",
        message="Tasks retrieved successfully",
        data={"tasks": [task.model_dump(mode="json") for task in tasks]},
    )


@router.get("/{task_id}", response_model=ResponseSchema)
async def get_task(
    task_id: UUID = Path(..., description="Task ID"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get a specific task by ID."""

    task = await TaskService(db).get_task(task_id, current_user.id)

    return ResponseSchema(
        status="success",
        message="Task retrieved successfully",
        data=task.model_dump(mode="json"),
    )


@router.put("/{task_id}", response_model=ResponseSchema)
async def update_task(
    task_id: UUID = Path(..., description="Task ID"),
    task_data: TaskUpdate = Body(...),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Update a task.

    Omitting ``assigned_user_id`` keeps the current assignee; sending
    ``null`` clears it.
    """

    task = await TaskService(db).update_task(task_id, task_data, current_user.id)

    return ResponseSchema(
        status="success",
        message="Task updated successfully",
        data=task.model_dump(mode="json"),
    )


@router.put("/{task_id}/move", response_model=ResponseSchema)
async def move_task(
    task_id: UUID = Path(..., description="Task ID"),
    move_data: TaskMove = Body(...),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Move a task to another list, or to another slot in the same list."""

    task = await TaskService(db).move_task(task_id, move_data, current_user.id)

    return ResponseSchema(
        status="success",
        message="Task moved successfully",
        data=task.model_dump(mode="json"),
    )


@router.delete("/{task_id}", response_model=ResponseSchema)
async def delete_task(
    task_id: UUID = Path(..., description="Task ID"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete a task."""

    await TaskService(db).delete_task(task_id, current_user.id)

    return ResponseSchema(status="success", message="Task deleted successfully", data=None)
