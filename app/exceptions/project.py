"""Project and membership exceptions."""

from .base import AccessDeniedError, InvalidStateError, NotFoundError


class ProjectNotFoundError(NotFoundError):
    """Raised when a project is not found or is not visible to the caller."""

    def __init__(self, message: str = "Project not found"):
        super().__init__(message=message, error_code="PROJECT_NOT_FOUND")


class ProjectAccessDeniedError(AccessDeniedError):
    """Raised when the caller is neither owner nor member of a project."""

    def __init__(self, message: str = "You don't have access to this project"):
        super().__init__(message=message)


class OwnerOnlyOperationError(AccessDeniedError):
    """Raised when a non-owner attempts an owner-only operation."""

    def __init__(self, message: str = "Only the project owner can perform this operation"):
        super().__init__(message=message)


class OwnerMembershipError(InvalidStateError):
    """Raised when the owner is removed from, or tries to leave, their project."""

    def __init__(self, message: str = "The project owner cannot be removed from the project"):
        super().__init__(message=message)


class NotProjectMemberError(InvalidStateError):
    """Raised when removing a user who is not a member of the project."""

    def __init__(self, message: str = "User is not a member of this project"):
        super().__init__(message=message)
