"""
A module defining the ``Task`` ORM model, a card on a board.

A task belongs to exactly one task list (which may change through a move)
and may be assigned to one user. The assignee is a weak reference: removing
the user clears the assignment instead of deleting the task.
"""

from sqlalchemy import Column, ForeignKey, Integer, String, Text

from .base import UUID, BaseModel


class Task(BaseModel):
    __tablename__ = "tasks"

    task_list_id = Column(
        UUID(), ForeignKey("task_lists.id", ondelete="CASCADE"), nullable=False, index=True
    )
    assigned_user_id = Column(UUID(), ForeignKey("users.id", ondelete="SET NULL"))

    title = Column(String(200), nullable=False)
    description = Column(Text)
    position = Column(Integer, nullable=False)  # 1-based within the task list
