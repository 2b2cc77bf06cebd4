"""Task list service layer with business logic."""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.domains.project.access import ProjectAccessEvaluator
from app.domains.task.service import to_task_response
from app.exceptions.base import PersistenceError
from app.exceptions.project import ProjectNotFoundError
from app.exceptions.task import TaskListNotFoundError
from app.schemas.task_list import (
    TaskListCreate,
    TaskListResponse,
    TaskListUpdate,
    TaskListWithTasks,
)
from app.shared.locking import lock_parents
from app.shared.positioning import append_position, normalize_positions, place_in_siblings
from models.project import Project
from models.task import Task
from models.task_list import TaskList

logger = logging.getLogger(__name__)


class TaskListService:
    """Service class for task lists and their ordering inside a project."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.access = ProjectAccessEvaluator(db)

    async def create_task_list(
        self, task_list_data: TaskListCreate, acting_user_id: UUID
    ) -> TaskListResponse:
        """Create a task list, appended unless a position is given."""
        logger.info(
            "Creating new task list: %s for project: %s",
            task_list_data.name,
            task_list_data.project_id,
        )

        project = await self.access.get_accessible_project(
            task_list_data.project_id, acting_user_id
        )
        if project is None:
            raise ProjectNotFoundError()

        try:
            await lock_parents(self.db, Project, project.id)

            if task_list_data.position is None:
                position = append_position(await self._get_max_position(project.id))
            else:
                siblings = await self._get_siblings(project.id)
                position = place_in_siblings(siblings, task_list_data.position)
                self.db.add_all(siblings)

            task_list = TaskList(
                project_id=project.id,
                name=task_list_data.name,
                position=position,
            )
            self.db.add(task_list)
            await self.db.commit()
            await self.db.refresh(task_list)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise PersistenceError(f"Failed to create task list: {str(e)}") from e

        return await self._to_response(task_list, project)

    async def get_task_list(self, task_list_id: UUID, acting_user_id: UUID) -> TaskListWithTasks:
        """Get a task list with its tasks. Lists in inaccessible projects look missing."""
        logger.debug("Finding task list by ID: %s", task_list_id)

        task_list = await self.db.get(TaskList, task_list_id)
        if task_list is None or not await self.access.has_access(
            task_list.project_id, acting_user_id
        ):
            raise TaskListNotFoundError()

        summary = await self._to_response(task_list)
        tasks_stmt = (
            select(Task)
            .where(Task.task_list_id == task_list.id)
            .order_by(Task.position, Task.created_at)
        )
        tasks = (await self.db.execute(tasks_stmt)).scalars().all()
        return TaskListWithTasks(
            **summary.model_dump(),
            tasks=[await to_task_response(self.db, task, task_list) for task in tasks],
        )

    async def get_task_lists_by_project(
        self, project_id: UUID, acting_user_id: UUID
    ) -> List[TaskListResponse]:
        """Task lists of a project in ascending position order."""
        logger.debug("Finding task lists for project with ID: %s", project_id)

        project = await self.access.get_accessible_project(project_id, acting_user_id)
        if project is None:
            raise ProjectNotFoundError()

        task_lists = await self._get_siblings(project.id)
        return [await self._to_response(task_list, project) for task_list in task_lists]

    async def update_task_list(
        self, task_list_id: UUID, task_list_data: TaskListUpdate, acting_user_id: UUID
    ) -> TaskListResponse:
        """Rename and/or reposition a task list."""
        logger.info("Updating task list with ID: %s", task_list_id)

        task_list = await self._get_task_list_or_404(task_list_id)
        await self.access.require_access(task_list.project_id, acting_user_id)

        update_data = task_list_data.model_dump(exclude_unset=True)

        try:
            new_position = update_data.get("position")
            if new_position is not None and new_position != task_list.position:
                await lock_parents(self.db, Project, task_list.project_id)
                siblings = await self._get_siblings(task_list.project_id, exclude_id=task_list.id)
                task_list.position = place_in_siblings(siblings, new_position)
                self.db.add_all(siblings)

            if update_data.get("name") is not None:
                task_list.name = update_data["name"]

            await self.db.commit()
            await self.db.refresh(task_list)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise PersistenceError(f"Failed to update task list: {str(e)}") from e

        return await self._to_response(task_list)

    async def delete_task_list(self, task_list_id: UUID, acting_user_id: UUID) -> bool:
        """Delete a task list with its tasks and renumber the remaining lists."""
        logger.info("Deleting task list with ID: %s", task_list_id)

        task_list = await self._get_task_list_or_404(task_list_id)
        await self.access.require_access(task_list.project_id, acting_user_id)
        project_id = task_list.project_id

        try:
            await lock_parents(self.db, Project, project_id)
            await self.db.execute(delete(Task).where(Task.task_list_id == task_list.id))
            await self.db.delete(task_list)

            remaining = await self._get_siblings(project_id, exclude_id=task_list_id)
            self.db.add_all(normalize_positions(remaining))

            await self.db.commit()
            return True
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise PersistenceError(f"Failed to delete task list: {str(e)}") from e

    # Private helper methods

    async def _get_task_list_or_404(self, task_list_id: UUID) -> TaskList:
        task_list = await self.db.get(TaskList, task_list_id)
        if task_list is None:
            raise TaskListNotFoundError()
        return task_list

    async def _get_max_position(self, project_id: UUID) -> Optional[int]:
        stmt = select(func.max(TaskList.position)).where(TaskList.project_id == project_id)
        result = await self.db.execute(stmt)
        return result.scalar()

    async def _get_siblings(
        self, project_id: UUID, exclude_id: Optional[UUID] = None
    ) -> List[TaskList]:
        """Task lists of one project in position order, reloaded from the database."""
        stmt = select(TaskList).where(TaskList.project_id == project_id)
        if exclude_id is not None:
            stmt = stmt.where(TaskList.id != exclude_id)
        stmt = stmt.order_by(TaskList.position, TaskList.created_at).execution_options(
            populate_existing=True
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def _to_response(
        self, task_list: TaskList, project: Optional[Project] = None
    ) -> TaskListResponse:
        if project is None:
            project = await self.db.get(Project, task_list.project_id)

        count_stmt = select(func.count(Task.id)).where(Task.task_list_id == task_list.id)
        task_count = (await self.db.execute(count_stmt)).scalar() or 0

        return TaskListResponse.model_validate(
            {
                "id": task_list.id,
                "name": task_list.name,
                "position": task_list.position,
                "project_id": task_list.project_id,
                "project_name": project.name if project else None,
                "task_count": task_count,
                "created_at": task_list.created_at,
                "updated_at": task_list.updated_at,
            }
        )
