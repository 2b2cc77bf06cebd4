"""
TaskList model: an ordered column of tasks inside a project.
"""

from sqlalchemy import Column, ForeignKey, Integer, String

from .base import UUID, BaseModel


class TaskList(BaseModel):
    """
    Represents a task list.

    ``position`` is 1-based and contiguous among the lists of one project.
    There is no unique constraint on ``(project_id, position)``:
    a reorder flushes shifted siblings and the moved row in one batch.
    """

    __tablename__ = "task_lists"

    project_id = Column(
        UUID(), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(100), nullable=False)
    position = Column(Integer, nullable=False)
