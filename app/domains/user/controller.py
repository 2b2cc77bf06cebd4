"""User API controller endpoints."""

from uuid import UUID

from fastapi import APIRouter, Body, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.dependencies import get_current_user, get_db
from app.domains.user.service import UserService
from app.schemas.base import ResponseSchema
from app.schemas.user import SimpleUserResponse, UserCreate, UserUpdate
from app.shared.pagination import PaginatedResponse, PaginationParams
from models.user import User

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("/", response_model=ResponseSchema, status_code=status.HTTP_201_CREATED)
async def register_user(user_data: UserCreate, db: AsyncSession = Depends(get_db)):
    """Register a new user account."""
    service = UserService(db)
    user = await service.create_user(user_data)
    response = await service.to_response(user)

    return ResponseSchema(
        status="success",
        message="User created successfully",
        data=response.model_dump(mode="json"),
    )


@router.get("/", response_model=PaginatedResponse[SimpleUserResponse])
async def list_users(
    page: int = Query(1, ge=1),
    size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    _current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Directory of users, for picking members and assignees."""
    return await UserService(db).list_users(PaginationParams(page=page, size=size))


@router.get("/me", response_model=ResponseSchema)
async def get_current_user_profile(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get the profile of the authenticated user."""
    user = await UserService(db).get_user(current_user.id)
    return ResponseSchema(
        status="success",
        message="User retrieved successfully",
        data=user.model_dump(mode="json"),
    )


@router.get("/{user_id}", response_model=ResponseSchema)
async def get_user(
    user_id: UUID = Path(..., description="User ID"),
    _current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get a user by ID."""
    user = await UserService(db).get_user(user_id)
    return ResponseSchema(
        status="success",
        message="User retrieved successfully",
        data=user.model_dump(mode="json"),
    )


@router.put("/{user_id}", response_model=ResponseSchema)
async def update_user(
    user_id: UUID = Path(..., description="User ID"),
    user_data: UserUpdate = Body(...),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Update a profile. Only the owner of the profile may do so."""
    user = await UserService(db).update_user(user_id, user_data, current_user.id)
    return ResponseSchema(
        status="success",
        message="User updated successfully",
        data=user.model_dump(mode="json"),
    )
