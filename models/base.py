"""
Defines the declarative base shared by every table of the board schema.

Rows are stored arena-style: every entity is addressed by its own UUID and
children reference their parent through a plain foreign-key id column
(``project_id``, ``task_list_id``) instead of holding parent objects.
Relationships are resolved with explicit queries in the service layer.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, TypeDecorator
from sqlalchemy.dialects.postgresql import UUID as PostgreSQLUUID
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    """Timezone-aware current time used for row timestamps."""
    return datetime.now(timezone.utc)


class UUID(TypeDecorator):
    """
    Platform-independent UUID type.

    Native ``UUID`` on PostgreSQL, ``CHAR(36)`` text everywhere else (SQLite
    in tests). Values always come back as :class:`uuid.UUID`.
    """

    impl = String
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(PostgreSQLUUID(as_uuid=True))
        return dialect.type_descriptor(String(36))

    def process_bind_param(self, value, dialect):
        if value is None or dialect.name == "postgresql":
            return value
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None or isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(value)


class BaseModel(Base):
    """
    Abstract base for identified, timestamped rows.

    :ivar id: Unique identifier for the record.
    :type id: UUID
    :ivar created_at: When the record was created.
    :type created_at: datetime
    :ivar updated_at: When the record was last updated.
    :type updated_at: datetime
    """

    __abstract__ = True

    id = Column(UUID(), primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
