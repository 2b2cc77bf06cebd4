"""User-related exceptions."""

from .base import AccessDeniedError, NotFoundError, ValidationError


class UserNotFoundError(NotFoundError):
    """Raised when a user is not found."""

    def __init__(self, message: str = "User not found"):
        super().__init__(message=message, error_code="USER_NOT_FOUND")


class UserAlreadyExistsError(ValidationError):
    """Raised when registering an email that is already taken."""

    def __init__(self, message: str = "A user with this email already exists"):
        super().__init__(message=message)


class UserPermissionError(AccessDeniedError):
    """Raised when a user acts on an account they may not manage."""

    def __init__(self, message: str = "You don't have permission to manage this user"):
        super().__init__(message=message)
