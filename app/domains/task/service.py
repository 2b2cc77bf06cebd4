"""Task service layer with business logic."""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.domains.project.access import ProjectAccessEvaluator
from app.exceptions.base import PersistenceError
from app.exceptions.task import TaskListNotFoundError, TaskNotFoundError
from app.exceptions.user import UserNotFoundError
from app.schemas.task import TaskCreate, TaskMove, TaskResponse, TaskUpdate
from app.shared.locking import lock_parents
from app.shared.positioning import (
    append_position,
    next_position,
    normalize_positions,
    place_in_siblings,
)
from models.task import Task
from models.task_list import TaskList
from models.user import User

logger = logging.getLogger(__name__)


async def to_task_response(
    db: AsyncSession, task: Task, task_list: Optional[TaskList] = None
) -> TaskResponse:
    """Build the task DTO, resolving the list name and assignee name by id."""
    if task_list is None:
        task_list = await db.get(TaskList, task.task_list_id)
    assigned_user = None
    if task.assigned_user_id is not None:
        assigned_user = await db.get(User, task.assigned_user_id)

    return TaskResponse.model_validate(
        {
            "id": task.id,
            "title": task.title,
            "description": task.description,
            "position": task.position,
            "task_list_id": task.task_list_id,
            "task_list_name": task_list.name if task_list else None,
            "assigned_user_id": task.assigned_user_id,
            "assigned_user_name": assigned_user.name if assigned_user else None,
            "created_at": task.created_at,
            "updated_at": task.updated_at,
        }
    )


class TaskService:
    """Service class for tasks and their ordering inside task lists."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.access = ProjectAccessEvaluator(db)

    async def create_task(self, task_data: TaskCreate, acting_user_id: UUID) -> TaskResponse:
        """Create a task, appended to the list unless a position is given."""
        logger.info(
            "Creating new task: %s for task list: %s", task_data.title, task_data.task_list_id
        )

        task_list = await self._get_task_list_or_404(task_data.task_list_id)
        await self.access.require_access(task_list.project_id, acting_user_id)

        if task_data.assigned_user_id is not None:
            await self._get_user_or_404(task_data.assigned_user_id)

        try:
            await lock_parents(self.db, TaskList, task_list.id)

            if task_data.position is None:
                position = append_position(await self._get_max_position(task_list.id))
            else:
                siblings = await self._get_siblings(task_list.id)
                position = place_in_siblings(siblings, task_data.position)
                self.db.add_all(siblings)

            task = Task(
                task_list_id=task_list.id,
                assigned_user_id=task_data.assigned_user_id,
                title=task_data.title,
                description=task_data.description,
                position=position,
            )
            self.db.add(task)
            await self.db.commit()
            await self.db.refresh(task)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise PersistenceError(f"Failed to create task: {str(e)}") from e

        return await to_task_response(self.db, task, task_list)

    async def get_task(self, task_id: UUID, acting_user_id: UUID) -> TaskResponse:
        """Get a task. Tasks in inaccessible projects look missing."""
        logger.debug("Finding task by ID: %s", task_id)

        task = await self.db.get(Task, task_id)
        if task is None:
            raise TaskNotFoundError()
        task_list = await self.db.get(TaskList, task.task_list_id)
        if not await self.access.has_access(task_list.project_id, acting_user_id):
            raise TaskNotFoundError()
        return await to_task_response(self.db, task, task_list)

    async def get_tasks_by_task_list(
        self, task_list_id: UUID, acting_user_id: UUID
    ) -> List[TaskResponse]:
        """Tasks of a list in ascending position order."""
        logger.debug("Finding tasks for task list with ID: %s", task_list_id)

        task_list = await self._get_task_list_or_404(task_list_id)
        await self.access.require_access(task_list.project_id, acting_user_id)

        tasks = await self._get_siblings(task_list.id)
        return [await to_task_response(self.db, task, task_list) for task in tasks]

    async def update_task(
        self, task_id: UUID, task_data: TaskUpdate, acting_user_id: UUID
    ) -> TaskResponse:
        """
        Partially update a task.

        ``assigned_user_id`` is applied only when present in the payload:
        ``None`` clears the assignment, an id replaces it. A new position
        reorders the task inside its current list.
        """
        logger.info("Updating task with ID: %s", task_id)

        task = await self._get_task_or_404(task_id)
        task_list = await self.db.get(TaskList, task.task_list_id)
        await self.access.require_access(task_list.project_id, acting_user_id)

        update_data = task_data.model_dump(exclude_unset=True)
        new_assignee = update_data.get("assigned_user_id")
        if new_assignee is not None:
            await self._get_user_or_404(new_assignee)

        try:
            new_position = update_data.get("position")
            if new_position is not None and new_position != task.position:
                await lock_parents(self.db, TaskList, task_list.id)
                siblings = await self._get_siblings(task_list.id, exclude_id=task.id)
                task.position = place_in_siblings(siblings, new_position)
                self.db.add_all(siblings)

            if update_data.get("title") is not None:
                task.title = update_data["title"]
            if "description" in update_data:
                task.description = update_data["description"]
            if "assigned_user_id" in update_data:
                task.assigned_user_id = new_assignee

            await self.db.commit()
            await self.db.refresh(task)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise PersistenceError(f"Failed to update task: {str(e)}") from e

        return await to_task_response(self.db, task, task_list)

    async def move_task(
        self, task_id: UUID, move_data: TaskMove, acting_user_id: UUID
    ) -> TaskResponse:
        """
        Move a task to a target list, possibly in another project.

        The actor needs access to both projects. The target list opens a slot
        (or appends), and the source list is renumbered to close the gap.
        """
        logger.info(
            "Moving task with ID: %s to task list: %s", task_id, move_data.target_task_list_id
        )

        task = await self._get_task_or_404(task_id)
        source_list = await self.db.get(TaskList, task.task_list_id)
        await self.access.require_access(source_list.project_id, acting_user_id)

        target_list = await self._get_task_list_or_404(move_data.target_task_list_id)
        await self.access.require_access(
            target_list.project_id,
            acting_user_id,
            "You don't have access to the target project",
        )

        old_task_list_id = task.task_list_id

        try:
            await lock_parents(self.db, TaskList, old_task_list_id, target_list.id)

            target_siblings = await self._get_siblings(target_list.id, exclude_id=task.id)
            if move_data.position is None:
                normalize_positions(target_siblings)
                position = next_position(target_siblings)
            else:
                position = place_in_siblings(target_siblings, move_data.position)
            self.db.add_all(target_siblings)

            task.task_list_id = target_list.id
            task.position = position

            if old_task_list_id != target_list.id:
                remaining = await self._get_siblings(old_task_list_id, exclude_id=task.id)
                self.db.add_all(normalize_positions(remaining))

            await self.db.commit()
            await self.db.refresh(task)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise PersistenceError(f"Failed to move task: {str(e)}") from e

        return await to_task_response(self.db, task, target_list)

    async def delete_task(self, task_id: UUID, acting_user_id: UUID) -> bool:
        """Delete a task and renumber the rest of its list."""
        logger.info("Deleting task with ID: %s", task_id)

        task = await self._get_task_or_404(task_id)
        task_list = await self.db.get(TaskList, task.task_list_id)
        await self.access.require_access(task_list.project_id, acting_user_id)

        try:
            await lock_parents(self.db, TaskList, task_list.id)
            await self.db.delete(task)

            remaining = await self._get_siblings(task_list.id, exclude_id=task.id)
            self.db.add_all(normalize_positions(remaining))

            await self.db.commit()
            return True
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise PersistenceError(f"Failed to delete task: {str(e)}") from e

    # Private helper methods

    async def _get_task_or_404(self, task_id: UUID) -> Task:
        task = await self.db.get(Task, task_id)
        if task is None:
            raise TaskNotFoundError()
        return task

    async def _get_task_list_or_404(self, task_list_id: UUID) -> TaskList:
        task_list = await self.db.get(TaskList, task_list_id)
        if task_list is None:
            raise TaskListNotFoundError()
        return task_list

    async def _get_user_or_404(self, user_id: UUID) -> User:
        user = await self.db.get(User, user_id)
        if user is None:
            raise UserNotFoundError()
        return user

    async def _get_max_position(self, task_list_id: UUID) -> Optional[int]:
        stmt = select(func.max(Task.position)).where(Task.task_list_id == task_list_id)
        result = await self.db.execute(stmt)
        return result.scalar()

    async def _get_siblings(
        self, task_list_id: UUID, exclude_id: Optional[UUID] = None
    ) -> List[Task]:
        """Tasks of one list in position order, reloaded from the database."""
        stmt = select(Task).where(Task.task_list_id == task_list_id)
        if exclude_id is not None:
            stmt = stmt.where(Task.id != exclude_id)
        stmt = stmt.order_by(Task.position, Task.created_at).execution_options(
            populate_existing=True
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
