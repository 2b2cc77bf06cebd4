"""Task list and task exceptions."""

from .base import NotFoundError


class TaskListNotFoundError(NotFoundError):
    """Raised when a task list is not found."""

    def __init__(self, message: str = "Task list not found"):
        super().__init__(message=message, error_code="TASK_LIST_NOT_FOUND")


class TaskNotFoundError(NotFoundError):
    """Raised when a task is not found."""

    def __init__(self, message: str = "Task not found"):
        super().__init__(message=message, error_code="TASK_NOT_FOUND")
