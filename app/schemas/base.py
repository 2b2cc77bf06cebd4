"""Base schemas for the application."""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Base schema class with common configuration."""
    model_config = ConfigDict(from_attributes=True)


class BaseModelSchema(BaseSchema):
    """Base schema for identified, timestamped rows."""
    id: UUID
    created_at: datetime
    updated_at: datetime


class ResponseSchema(BaseSchema):
    """Standard success envelope for single entities."""
    status: str
    message: Optional[str] = None
    data: Optional[dict] = None


class ErrorResponseSchema(BaseSchema):
    """Error envelope rendered by the global exception handlers."""
    status: str = "error"
    message: str
    error_code: str
    details: Optional[Any] = None
    timestamp: datetime
    request_id: Optional[str] = None
