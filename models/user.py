"""
Provides the User model and the closed set of account roles.

Users are referenced, never owned, by the rest of the schema: a project
points at its owner through ``owner_id``, membership rows point at their
user, and a task may point at its assignee through ``assigned_user_id``.

Attributes
----------
name : sqlalchemy.Column
    Display name.
email : sqlalchemy.Column
    Unique email address used as the login identifier.
password_hash : sqlalchemy.Column
    Opaque credential. It never leaves the persistence layer.
role : sqlalchemy.Column
    One of :class:`Role`.
is_active : sqlalchemy.Column
    Disabled accounts cannot authenticate.
"""

from enum import Enum

from sqlalchemy import Boolean, Column, String
from sqlalchemy import Enum as SAEnum

from .base import BaseModel


class Role(str, Enum):
    """Account roles. Administrators may use the admin API surface."""

    MEMBER = "member"
    ADMINISTRATOR = "administrator"


class User(BaseModel):
    """
    Represents a user account.

    :ivar name: Display name of the user.
    :type name: str
    :ivar email: Email address of the user. It must be unique.
    :type email: str
    :ivar role: Role of the account.
    :type role: Role
    :ivar is_active: Indicates whether the account is enabled.
    :type is_active: bool
    """

    __tablename__ = "users"

    name = Column(String(100), nullable=False)
    email = Column(String(100), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        SAEnum(Role, name="user_role", values_callable=lambda roles: [r.value for r in roles]),
        nullable=False,
        default=Role.MEMBER,
    )
    is_active = Column(Boolean, nullable=False, default=True)
