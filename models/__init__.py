"""
Models package initialization.
"""

from .base import Base, BaseModel
from .project import Project, ProjectMember
from .task import Task
from .task_list import TaskList
from .user import Role, User

__all__ = [
    "Base",
    "BaseModel",
    "Role",
    "User",
    "Project",
    "ProjectMember",
    "TaskList",
    "Task",
]
