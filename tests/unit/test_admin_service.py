"""Unit tests for AdminService."""

import uuid

import pytest

from app.domains.admin.service import AdminService
from app.exceptions.base import AccessDeniedError
from app.exceptions.user import UserNotFoundError
from models import Role


class TestAdminService:
    @pytest.mark.asyncio
    async def test_list_users_detailed(self, test_db, test_user, admin_user):
        page = await AdminService(test_db).list_users_detailed()

        assert page.total == 2
        assert all(u.assigned_task_count == 0 for u in page.items)

    @pytest.mark.asyncio
    async def test_promote_to_administrator(self, test_db, test_user):
        result = await AdminService(test_db).change_user_role(test_user.id, Role.ADMINISTRATOR)

        assert result.role == Role.ADMINISTRATOR

    @pytest.mark.asyncio
    async def test_disable_and_enable(self, test_db, test_user):
        service = AdminService(test_db)

        disabled = await service.disable_user(test_user.id)
        assert disabled.is_active is False

        enabled = await service.enable_user(test_user.id)
        assert enabled.is_active is True

    @pytest.mark.asyncio
    async def test_cannot_disable_administrator(self, test_db, admin_user):
        with pytest.raises(AccessDeniedError):
            await AdminService(test_db).disable_user(admin_user.id)

    @pytest.mark.asyncio
    async def test_unknown_user(self, test_db):
        with pytest.raises(UserNotFoundError):
            await AdminService(test_db).enable_user(uuid.uuid4())
