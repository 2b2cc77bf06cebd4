"""Unit tests for UserService."""

import uuid

import pytest

from app.core.security import verify_password
from app.domains.user.service import UserService
from app.exceptions.user import UserAlreadyExistsError, UserNotFoundError, UserPermissionError
from app.schemas.user import UserCreate, UserUpdate
from app.shared.pagination import PaginationParams
from models import Role, Task


class TestUserService:
    @pytest.mark.asyncio
    async def test_create_user(self, test_db):
        user = await UserService(test_db).create_user(
            UserCreate(name="  Erin  ", email="erin@example.com", password="hunter22")
        )

        assert user.name == "Erin"
        assert user.role == Role.MEMBER
        assert user.is_active is True

    @pytest.mark.asyncio
    async def test_create_user_stores_only_a_hash(self, test_db):
        user = await UserService(test_db).create_user(
            UserCreate(name="Grace", email="grace@example.com", password="hunter22")
        )

        assert user.password_hash != "hunter22"
        assert "hunter22" not in user.password_hash
        assert verify_password("hunter22", user.password_hash)
        assert not verify_password("wrong-pass", user.password_hash)

    @pytest.mark.asyncio
    async def test_create_user_duplicate_email(self, test_db, test_user):
        with pytest.raises(UserAlreadyExistsError):
            await UserService(test_db).create_user(
                UserCreate(name="Impostor", email=test_user.email, password="hunter22")
            )

    @pytest.mark.asyncio
    async def test_lookup_by_id_and_email(self, test_db, test_user):
        service = UserService(test_db)

        assert (await service.get_user_by_id(test_user.id)).id == test_user.id
        assert (await service.get_user_by_email("alice@example.com")).id == test_user.id
        assert await service.get_user_by_email("nobody@example.com") is None

    @pytest.mark.asyncio
    async def test_get_user_counts_assigned_tasks(self, test_db, test_user, test_task_list):
        test_db.add_all(
            Task(
                task_list_id=test_task_list.id,
                title=f"Assigned {i}",
                position=i,
                assigned_user_id=test_user.id,
            )
            for i in (1, 2)
        )
        await test_db.commit()

        result = await UserService(test_db).get_user(test_user.id)

        assert result.assigned_task_count == 2
        assert not hasattr(result, "password_hash")

    @pytest.mark.asyncio
    async def test_get_missing_user(self, test_db):
        with pytest.raises(UserNotFoundError):
            await UserService(test_db).get_user(uuid.uuid4())

    @pytest.mark.asyncio
    async def test_update_own_profile(self, test_db, test_user):
        result = await UserService(test_db).update_user(
            test_user.id, UserUpdate(name="Alice Renamed"), test_user.id
        )

        assert result.name == "Alice Renamed"

    @pytest.mark.asyncio
    async def test_update_other_profile_rejected(self, test_db, test_user, test_user_2):
        with pytest.raises(UserPermissionError):
            await UserService(test_db).update_user(
                test_user_2.id, UserUpdate(name="Not yours"), test_user.id
            )

    @pytest.mark.asyncio
    async def test_list_users_sorted_by_name(self, test_db, test_user, test_user_2, outsider):
        page = await UserService(test_db).list_users(PaginationParams(page=1, size=2))

        assert page.total == 3
        assert [u.name for u in page.items] == ["Alice Owner", "Bob Member"]
        assert page.has_next
