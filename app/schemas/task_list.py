"""Task list schemas for request/response serialization."""

from __future__ import annotations

from uuid import UUID

from pydantic import ConfigDict, Field

from .base import BaseModelSchema, BaseSchema
from .task import TaskResponse


class TaskListCreate(BaseSchema):
    """Schema for creating a task list. Without a position it is appended."""

    name: str = Field(..., min_length=3, max_length=100)
    project_id: UUID
    position: int | None = Field(None, ge=1)


class TaskListUpdate(BaseSchema):
    """Schema for updating a task list."""

    name: str | None = Field(None, min_length=3, max_length=100)
    position: int | None = Field(None, ge=1)


class TaskListResponse(BaseModelSchema):
    """Schema for task list response."""

    name: str
    position: int
    project_id: UUID
    project_name: str | None = None
    task_count: int = 0

    model_config = ConfigDict(from_attributes=True)


class TaskListWithTasks(TaskListResponse):
    """Task list with its tasks in position order."""

    tasks: list[TaskResponse] = []
