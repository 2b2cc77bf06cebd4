# app/domains/user/service.py
import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.core.security import hash_password
from app.exceptions.base import PersistenceError
from app.exceptions.user import UserAlreadyExistsError, UserNotFoundError, UserPermissionError
from app.schemas.user import SimpleUserResponse, UserCreate, UserResponse, UserUpdate
from app.shared.pagination import PaginatedResponse, PaginationParams, paginate_as
from models.task import Task
from models.user import User

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user_by_id(self, user_id: UUID) -> Optional[User]:
        """Get a user entity by ID."""
        return await self.db.get(User, user_id)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        """Get a user entity by email."""
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_user(self, user_id: UUID) -> UserResponse:
        """Get the public view of a user."""
        logger.debug("Finding user DTO by ID: %s", user_id)
        user = await self.get_user_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        return await self.to_response(user)

    async def create_user(self, user_data: UserCreate) -> User:
        """Register a new user. Only the password hash is stored."""
        logger.info("Creating new user with email: %s", user_data.email)

        if await self.get_user_by_email(str(user_data.email)):
            raise UserAlreadyExistsError()

        user = User(
            name=user_data.name,
            email=str(user_data.email),
            password_hash=hash_password(user_data.password),
        )

        try:
            self.db.add(user)
            await self.db.commit()
            await self.db.refresh(user)
            return user
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise PersistenceError(f"Failed to create user: {str(e)}") from e

    async def update_user(
        self, user_id: UUID, user_data: UserUpdate, acting_user_id: UUID
    ) -> UserResponse:
        """Update a profile. Users may only update their own."""
        logger.info("Updating user with ID: %s", user_id)

        if user_id != acting_user_id:
            raise UserPermissionError("You can only update your own profile")

        user = await self.get_user_by_id(user_id)
        if user is None:
            raise UserNotFoundError()

        try:
            if user_data.name is not None:
                user.name = user_data.name
            await self.db.commit()
            await self.db.refresh(user)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise PersistenceError(f"Failed to update user: {str(e)}") from e

        return await self.to_response(user)

    async def list_users(
        self, pagination: Optional[PaginationParams] = None
    ) -> PaginatedResponse[SimpleUserResponse]:
        """Paginated directory of users."""

        async def convert(user: User) -> SimpleUserResponse:
            return SimpleUserResponse.model_validate(user)

        stmt = select(User).order_by(User.name, User.id)
        page = await paginate_as(self.db, stmt, pagination or PaginationParams(), convert)
        return PaginatedResponse[SimpleUserResponse](**page)

    async def to_response(self, user: User) -> UserResponse:
        """Full user view including the number of assigned tasks."""
        stmt = select(func.count(Task.id)).where(Task.assigned_user_id == user.id)
        assigned_task_count = (await self.db.execute(stmt)).scalar() or 0

        return UserResponse.model_validate(
            {
                "id": user.id,
                "name": user.name,
                "email": user.email,
                "role": user.role,
                "is_active": user.is_active,
                "assigned_task_count": assigned_task_count,
                "created_at": user.created_at,
                "updated_at": user.updated_at,
            }
        )
