"""Task schemas for request/response serialization."""

from __future__ import annotations

from uuid import UUID

from pydantic import ConfigDict, Field

from .base import BaseModelSchema, BaseSchema


class TaskBase(BaseSchema):
    """Base task schema with common fields."""

    title: str = Field(..., min_length=3, max_length=200)
    description: str | None = Field(None, max_length=1000)


class TaskCreate(TaskBase):
    """Schema for creating a new task."""

    task_list_id: UUID
    assigned_user_id: UUID | None = None
    position: int | None = Field(None, ge=1)


class TaskUpdate(BaseSchema):
    """
    Schema for updating a task.

    Only fields present in the payload are applied. ``assigned_user_id``
    sent as ``null`` clears the assignment, leaving it out keeps it.
    """

    title: str | None = Field(None, min_length=3, max_length=200)
    description: str | None = Field(None, max_length=1000)
    assigned_user_id: UUID | None = None
    position: int | None = Field(None, ge=1)


class TaskMove(BaseSchema):
    """Schema for moving a task to another (or the same) task list."""

    target_task_list_id: UUID
    position: int | None = Field(None, ge=1)


class TaskResponse(BaseModelSchema):
    """Schema for task response."""

    title: str
    description: str | None = None
    position: int
    task_list_id: UUID
    task_list_name: str | None = None
    assigned_user_id: UUID | None = None
    assigned_user_name: str | None = None

    model_config = ConfigDict(from_attributes=True)
