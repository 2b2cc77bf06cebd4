"""Project service layer with business logic."""

import logging
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy import and_, delete, desc, func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.domains.project.access import ProjectAccessEvaluator
from app.exceptions.base import PersistenceError
from app.exceptions.project import (
    NotProjectMemberError,
    OwnerMembershipError,
    OwnerOnlyOperationError,
    ProjectNotFoundError,
)
from app.exceptions.user import UserNotFoundError
from app.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate
from app.schemas.user import SimpleUserResponse
from app.shared.pagination import PaginatedResponse, PaginationParams, paginate_as
from models.project import Project, ProjectMember
from models.task import Task
from models.task_list import TaskList
from models.user import User

logger = logging.getLogger(__name__)


class ProjectService:
    """Service class for project lifecycle and membership."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.access = ProjectAccessEvaluator(db)

    async def create_project(
        self, project_data: ProjectCreate, acting_user_id: UUID
    ) -> ProjectResponse:
        """Create a project owned by the acting user, with no members or lists."""
        logger.info("Creating new project: %s", project_data.name)

        owner = await self.db.get(User, acting_user_id)
        if owner is None:
            raise UserNotFoundError()

        project = Project(
            owner_id=owner.id,
            name=project_data.name,
            description=project_data.description,
        )

        try:
            self.db.add(project)
            await self.db.commit()
            await self.db.refresh(project)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise PersistenceError(f"Failed to create project: {str(e)}") from e

        return await self._to_response(project)

    async def get_project(self, project_id: UUID, acting_user_id: UUID) -> ProjectResponse:
        """Get a project the acting user can see. Inaccessible projects look missing."""
        logger.debug("Finding project by ID: %s", project_id)

        project = await self.access.get_accessible_project(project_id, acting_user_id)
        if project is None:
            raise ProjectNotFoundError()
        return await self._to_response(project)

    async def get_accessible_projects(
        self, acting_user_id: UUID, pagination: Optional[PaginationParams] = None
    ) -> PaginatedResponse[ProjectResponse]:
        """Projects the user owns or is a member of."""
        stmt = select(Project).where(
            or_(
                Project.owner_id == acting_user_id,
                Project.id.in_(self._member_project_ids(acting_user_id)),
            )
        )
        return await self._page(stmt, pagination)

    async def get_owned_projects(
        self, acting_user_id: UUID, pagination: Optional[PaginationParams] = None
    ) -> PaginatedResponse[ProjectResponse]:
        """Projects the user owns."""
        stmt = select(Project).where(Project.owner_id == acting_user_id)
        return await self._page(stmt, pagination)

    async def get_member_projects(
        self, acting_user_id: UUID, pagination: Optional[PaginationParams] = None
    ) -> PaginatedResponse[ProjectResponse]:
        """Projects the user is a member of, excluding the ones they own."""
        stmt = select(Project).where(
            and_(
                Project.id.in_(self._member_project_ids(acting_user_id)),
                Project.owner_id != acting_user_id,
            )
        )
        return await self._page(stmt, pagination)

    async def update_project(
        self, project_id: UUID, project_data: ProjectUpdate, acting_user_id: UUID
    ) -> ProjectResponse:
        """Update name and/or description. Omitted fields keep their value."""
        logger.info("Updating project with ID: %s", project_id)

        project = await self._get_project_or_404(project_id)
        await self.access.require_access(project_id, acting_user_id)

        update_data = project_data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            if field == "name" and value is None:
                continue
            setattr(project, field, value)

        try:
            await self.db.commit()
            await self.db.refresh(project)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise PersistenceError(f"Failed to update project: {str(e)}") from e

        return await self._to_response(project)

    async def delete_project(self, project_id: UUID, acting_user_id: UUID) -> bool:
        """Delete a project with its task lists, tasks and memberships. Owner only."""
        logger.info("Deleting project with ID: %s", project_id)

        project = await self._get_project_or_404(project_id)
        if project.owner_id != acting_user_id:
            logger.warning("User %s is not the owner of project %s", acting_user_id, project_id)
            raise OwnerOnlyOperationError("Only the project owner can delete the project")

        try:
            await self._delete_project_tree(project)
            await self.db.commit()
            return True
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise PersistenceError(f"Failed to delete project: {str(e)}") from e

    async def add_member(
        self, project_id: UUID, user_id: UUID, acting_user_id: UUID
    ) -> ProjectResponse:
        """Add a user to the member set. Adding an existing member changes nothing."""
        logger.info("Adding user ID: %s to project ID: %s", user_id, project_id)

        project = await self._get_project_or_404(project_id)
        await self.access.require_access(project_id, acting_user_id)

        user_to_add = await self.db.get(User, user_id)
        if user_to_add is None:
            raise UserNotFoundError()

        if project.owner_id == user_id or await self.access.is_member(project_id, user_id):
            logger.debug("User %s already has access to project %s", user_id, project_id)
            return await self._to_response(project)

        try:
            self.db.add(ProjectMember(project_id=project_id, user_id=user_id))
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise PersistenceError(f"Failed to add member: {str(e)}") from e

        return await self._to_response(project)

    async def remove_member(
        self, project_id: UUID, user_id: UUID, acting_user_id: UUID
    ) -> ProjectResponse:
        """
        Remove a user from the member set.

        The owner may remove any member, a member may only remove themself.
        The owner can never be removed.
        """
        logger.info("Removing user ID: %s from project ID: %s", user_id, project_id)

        project = await self._get_project_or_404(project_id)
        await self.access.require_access(project_id, acting_user_id)

        if await self.db.get(User, user_id) is None:
            raise UserNotFoundError()

        if project.owner_id == user_id:
            raise OwnerMembershipError("Cannot remove the project owner")

        if project.owner_id != acting_user_id and user_id != acting_user_id:
            raise OwnerOnlyOperationError("Only the project owner can remove other members")

        await self._remove_membership(project_id, user_id)
        return await self._to_response(project)

    async def leave_project(self, project_id: UUID, acting_user_id: UUID) -> bool:
        """The acting user removes themself from the member set."""
        logger.info("User %s leaving project ID: %s", acting_user_id, project_id)

        project = await self._get_project_or_404(project_id)
        if project.owner_id == acting_user_id:
            raise OwnerMembershipError("Project owner cannot leave the project")

        await self._remove_membership(project_id, acting_user_id)
        return True

    # Private helper methods
    async def _get_project_or_404(self, project_id: UUID) -> Project:
        project = await self.db.get(Project, project_id)
        if project is None:
            raise ProjectNotFoundError()
        return project

    @staticmethod
    def _member_project_ids(user_id: UUID):
        return select(ProjectMember.project_id).where(ProjectMember.user_id == user_id)

    async def _remove_membership(self, project_id: UUID, user_id: UUID) -> None:
        if not await self.access.is_member(project_id, user_id):
            raise NotProjectMemberError()

        stmt = delete(ProjectMember).where(
            and_(ProjectMember.project_id == project_id, ProjectMember.user_id == user_id)
        )
        try:
            await self.db.execute(stmt)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise PersistenceError(f"Failed to remove member: {str(e)}") from e

    async def _delete_project_tree(self, project: Project) -> None:
        """Delete tasks, task lists and memberships, then the project itself."""
        task_list_ids = select(TaskList.id).where(TaskList.project_id == project.id)
        await self.db.execute(delete(Task).where(Task.task_list_id.in_(task_list_ids)))
        await self.db.execute(delete(TaskList).where(TaskList.project_id == project.id))
        await self.db.execute(delete(ProjectMember).where(ProjectMember.project_id == project.id))
        await self.db.delete(project)

    async def _page(
        self, stmt, pagination: Optional[PaginationParams]
    ) -> PaginatedResponse[ProjectResponse]:
        stmt = stmt.order_by(desc(Project.updated_at), Project.id)
        page = await paginate_as(
            self.db, stmt, pagination or PaginationParams(), self._to_response
        )
        return PaginatedResponse[ProjectResponse](**page)

    async def _to_response(self, project: Project) -> ProjectResponse:
        owner = await self.db.get(User, project.owner_id)

        members_stmt = (
            select(User)
            .join(ProjectMember, ProjectMember.user_id == User.id)
            .where(ProjectMember.project_id == project.id)
            .order_by(User.name)
        )
        members = (await self.db.execute(members_stmt)).scalars().all()

        task_list_count_stmt = select(func.count(TaskList.id)).where(
            TaskList.project_id == project.id
        )
        task_list_count = (await self.db.execute(task_list_count_stmt)).scalar() or 0

        project_dict: Dict[str, Any] = {
            "id": project.id,
            "name": project.name,
            "description": project.description,
            "owner_id": project.owner_id,
            "owner_name": owner.name if owner else None,
            "member_count": len(members),
            "task_list_count": task_list_count,
            "members": [SimpleUserResponse.model_validate(m) for m in members],
            "created_at": project.created_at,
            "updated_at": project.updated_at,
        }
        return ProjectResponse.model_validate(project_dict)
