"""User-related Pydantic schemas for request/response validation."""

from typing import Optional
from uuid import UUID

from pydantic import EmailStr, Field, field_validator

from models.user import Role

from .base import BaseModelSchema, BaseSchema


class UserCreate(BaseSchema):
    """Schema for registering a user."""

    name: str = Field(..., min_length=3, max_length=100, description="Display name")
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=6, max_length=100, description="Plain-text password, hashed before storage")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Strip the display name and reject blank values."""
        v = v.strip()
        if not v:
            raise ValueError("Name cannot be empty or only whitespace")
        return v


class UserUpdate(BaseSchema):
    """Fields a user may change on their own profile."""

    name: Optional[str] = Field(None, min_length=3, max_length=100)


class SimpleUserResponse(BaseSchema):
    """Compact user view embedded in project and task payloads."""

    id: UUID
    name: str
    email: str
    role: Role


class UserResponse(BaseModelSchema):
    """Schema for user response data. Never carries the credential."""

    name: str
    email: str
    role: Role
    is_active: bool
    assigned_task_count: Optional[int] = None


class UserRoleUpdate(BaseSchema):
    """Schema for changing a user's role."""

    role: Role
