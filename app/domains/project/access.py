"""
Project-level access checks.

A user has access to a project when they own it or are one of its members.
Every task-list and task operation resolves its owning project and asks the
same question, so this module is the single source of that decision.
"""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import and_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.exceptions.project import ProjectAccessDeniedError
from models.project import Project, ProjectMember

logger = logging.getLogger(__name__)


class ProjectAccessEvaluator:
    """Answers owner / member / no-access questions about a project."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def has_access(self, project_id: UUID, user_id: UUID) -> bool:
        """
        Check whether a user is the owner or a member of a project.

        An unknown project never grants access.
        """
        project = await self.db.get(Project, project_id)
        if project is None:
            return False
        if project.owner_id == user_id:
            return True
        return await self.is_member(project_id, user_id)

    async def is_owner(self, project_id: UUID, user_id: UUID) -> bool:
        """Check whether a user owns a project."""
        project = await self.db.get(Project, project_id)
        return project is not None and project.owner_id == user_id

    async def is_member(self, project_id: UUID, user_id: UUID) -> bool:
        """Check whether a user is in the member set. Owners are not members."""
        stmt = select(ProjectMember.user_id).where(
            and_(ProjectMember.project_id == project_id, ProjectMember.user_id == user_id)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def get_accessible_project(
        self, project_id: UUID, user_id: UUID
    ) -> Optional[Project]:
        """Return the project when the user has access to it, otherwise None."""
        if not await self.has_access(project_id, user_id):
            return None
        return await self.db.get(Project, project_id)

    async def require_access(
        self,
        project_id: UUID,
        user_id: UUID,
        message: str = "You don't have access to this project",
    ) -> None:
        """Raise ``ProjectAccessDeniedError`` unless the user has access."""
        if not await self.has_access(project_id, user_id):
            logger.warning("User %s denied access to project %s", user_id, project_id)
            raise ProjectAccessDeniedError(message)
