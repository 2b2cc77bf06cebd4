"""
Project model and its membership association.
"""

from sqlalchemy import Column, DateTime, ForeignKey, String, Text

from .base import UUID, Base, BaseModel, utcnow


class Project(BaseModel):
    """
    Represents a project, the aggregate root of a board.

    The owner is fixed at creation and is never stored as a member.
    """

    __tablename__ = "projects"

    owner_id = Column(UUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text)


class ProjectMember(Base):
    """
    Membership of a user in a project.

    The composite primary key gives the member set its set semantics.
    """

    __tablename__ = "project_members"

    project_id = Column(
        UUID(), ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True
    )
    user_id = Column(UUID(), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    joined_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
