"""Administrator API endpoints."""

import logging
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.dependencies import get_db, require_admin
from app.domains.admin.service import AdminService
from app.schemas.base import ResponseSchema
from app.schemas.user import UserResponse, UserRoleUpdate
from app.shared.pagination import PaginatedResponse, PaginationParams
from models.user import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/users", response_model=PaginatedResponse[UserResponse])
async def list_users(
    page: int = Query(1, ge=1),
    size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    _admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """All users with their assigned task counts."""
    return await AdminService(db).list_users_detailed(PaginationParams(page=page, size=size))


@router.put("/users/{user_id}/role", response_model=ResponseSchema)
async def change_user_role(
    user_id: UUID = Path(..., description="User ID"),
    role_data: UserRoleUpdate = Body(...),
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Change the role of a user."""
    logger.info("Admin %s changing role of user %s", admin.id, user_id)
    user = await AdminService(db).change_user_role(user_id, role_data.role)
    return ResponseSchema(
        status="success",
        message="User role updated successfully",
        data=user.model_dump(mode="json"),
    )


@router.put("/users/{user_id}/disable", response_model=ResponseSchema)
async def disable_user(
    user_id: UUID = Path(..., description="User ID"),
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Disable a user account."""
    logger.info("Admin %s disabling user %s", admin.id, user_id)
    user = await AdminService(db).disable_user(user_id)
    return ResponseSchema(
        status="success",
        message="User disabled successfully",
        data=user.model_dump(mode="json"),
    )


@router.put("/users/{user_id}/enable", response_model=ResponseSchema)
async def enable_user(
    user_id: UUID = Path(..., description="User ID"),
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Re-enable a user account."""
    logger.info("Admin %s enabling user %s", admin.id, user_id)
    user = await AdminService(db).enable_user(user_id)
    return ResponseSchema(
        status="success",
        message="User enabled successfully",
        data=user.model_dump(mode="json"),
    )
