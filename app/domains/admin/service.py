"""Admin-only user management."""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.domains.user.service import UserService
from app.exceptions.base import AccessDeniedError, PersistenceError
from app.exceptions.user import UserNotFoundError
from app.schemas.user import UserResponse
from app.shared.pagination import PaginatedResponse, PaginationParams, paginate_as
from models.user import Role, User

logger = logging.getLogger(__name__)


class AdminService:
    """
    Account administration: roles and enabled state.

    Callers are expected to be administrators; the check happens at the
    boundary (``require_admin``) and is independent of project access.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.users = UserService(db)

    async def list_users_detailed(
        self, pagination: Optional[PaginationParams] = None
    ) -> PaginatedResponse[UserResponse]:
        """All users with their assigned task counts."""
        logger.info("Getting detailed information for all users with pagination")

        stmt = select(User).order_by(User.created_at, User.id)
        page = await paginate_as(
            self.db, stmt, pagination or PaginationParams(), self.users.to_response
        )
        return PaginatedResponse[UserResponse](**page)

    async def change_user_role(self, user_id: UUID, role: Role) -> UserResponse:
        """Set the role of a user."""
        logger.info("Changing role of user ID %s to %s", user_id, role.value)

        user = await self._get_user_or_404(user_id)
        user.role = role
        return await self._save(user, "change user role")

    async def disable_user(self, user_id: UUID) -> UserResponse:
        """Disable an account. Administrator accounts cannot be disabled."""
        logger.info("Disabling user with ID: %s", user_id)

        user = await self._get_user_or_404(user_id)
        if user.role == Role.ADMINISTRATOR:
            logger.warning("Attempt to disable an admin account: %s", user_id)
            raise AccessDeniedError("Cannot disable an admin account")

        user.is_active = False
        return await self._save(user, "disable user")

    async def enable_user(self, user_id: UUID) -> UserResponse:
        """Enable an account."""
        logger.info("Enabling user with ID: %s", user_id)

        user = await self._get_user_or_404(user_id)
        user.is_active = True
        return await self._save(user, "enable user")

    async def _get_user_or_404(self, user_id: UUID) -> User:
        user = await self.db.get(User, user_id)
        if user is None:
            raise UserNotFoundError()
        return user

    async def _save(self, user: User, action: str) -> UserResponse:
        try:
            await self.db.commit()
            await self.db.refresh(user)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise PersistenceError(f"Failed to {action}: {str(e)}") from e
        return await self.users.to_response(user)
