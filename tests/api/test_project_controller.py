"""
API tests for the project controller.

Requests go through the ASGI app with the database and the current user
overridden in conftest.
"""

import uuid

import jwt
import pytest
from fastapi import status
from httpx import AsyncClient

from app.core.config import settings


class TestProjectController:
    @pytest.mark.asyncio
    async def test_create_project(self, authenticated_client: AsyncClient, test_user):
        response = await authenticated_client.post(
            "/api/projects/", json={"name": "New Project", "description": "A new project"}
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["status"] == "success"
        assert data["message"] == "Project created successfully"
        assert data["data"]["name"] == "New Project"
        assert data["data"]["owner_id"] == str(test_user.id)
        assert data["data"]["member_count"] == 0

    @pytest.mark.asyncio
    async def test_create_project_validation_error(self, authenticated_client: AsyncClient):
        response = await authenticated_client.post("/api/projects/", json={"name": "ab"})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        data = response.json()
        assert data["status"] == "error"
        assert data["error_code"] == "VALIDATION_ERROR"
        assert "name" in data["details"]

    @pytest.mark.asyncio
    async def test_list_accessible_projects(self, authenticated_client: AsyncClient, test_project):
        response = await authenticated_client.get("/api/projects/")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["total"] == 1
        assert data["items"][0]["id"] == str(test_project.id)

    @pytest.mark.asyncio
    async def test_owned_and_member_views(
        self, client: AsyncClient, act_as, test_project, project_member
    ):
        act_as(project_member)

        owned = await client.get("/api/projects/owned")
        member = await client.get("/api/projects/member")

        assert owned.json()["total"] == 0
        assert [p["id"] for p in member.json()["items"]] == [str(test_project.id)]

    @pytest.mark.asyncio
    async def test_page_size_limit(self, authenticated_client: AsyncClient):
        response = await authenticated_client.get("/api/projects/", params={"size": 1000})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    @pytest.mark.asyncio
    async def test_get_project(self, authenticated_client: AsyncClient, test_project):
        response = await authenticated_client.get(f"/api/projects/{test_project.id}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["name"] == "Test Project"

    @pytest.mark.asyncio
    async def test_get_project_hidden_from_outsider(
        self, client: AsyncClient, act_as, test_project, outsider
    ):
        act_as(outsider)

        response = await client.get(f"/api/projects/{test_project.id}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        data = response.json()
        assert data["status"] == "error"
        assert data["error_code"] == "PROJECT_NOT_FOUND"
        assert data["request_id"] == response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_update_project(self, authenticated_client: AsyncClient, test_project):
        response = await authenticated_client.put(
            f"/api/projects/{test_project.id}", json={"description": "Updated"}
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["name"] == "Test Project"
        assert data["description"] == "Updated"

    @pytest.mark.asyncio
    async def test_update_project_outsider_denied(
        self, client: AsyncClient, act_as, test_project, outsider
    ):
        act_as(outsider)

        response = await client.put(f"/api/projects/{test_project.id}", json={"name": "Taken"})

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["error_code"] == "ACCESS_DENIED"

    @pytest.mark.asyncio
    async def test_delete_project_member_denied(
        self, client: AsyncClient, act_as, test_project, project_member
    ):
        act_as(project_member)

        response = await client.delete(f"/api/projects/{test_project.id}")

        assert response.status_code == status.HTTP_403_FORBIDDEN

    @pytest.mark.asyncio
    async def test_delete_project(self, authenticated_client: AsyncClient, test_project):
        response = await authenticated_client.delete(f"/api/projects/{test_project.id}")

        assert response.status_code == status.HTTP_200_OK
        follow_up = await authenticated_client.get(f"/api/projects/{test_project.id}")
        assert follow_up.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_add_and_remove_member(
        self, authenticated_client: AsyncClient, test_project, test_user_2
    ):
        url = f"/api/projects/{test_project.id}/members/{test_user_2.id}"

        added = await authenticated_client.post(url)
        assert added.status_code == status.HTTP_200_OK
        assert added.json()["data"]["member_count"] == 1

        again = await authenticated_client.post(url)
        assert again.json()["data"]["member_count"] == 1

        removed = await authenticated_client.delete(url)
        assert removed.status_code == status.HTTP_200_OK
        assert removed.json()["data"]["member_count"] == 0

    @pytest.mark.asyncio
    async def test_add_member_to_missing_project(
        self, authenticated_client: AsyncClient, test_user_2
    ):
        response = await authenticated_client.post(
            f"/api/projects/{uuid.uuid4()}/members/{test_user_2.id}"
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_owner_cannot_leave(self, authenticated_client: AsyncClient, test_project):
        response = await authenticated_client.post(f"/api/projects/{test_project.id}/leave")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error_code"] == "INVALID_STATE"

    @pytest.mark.asyncio
    async def test_member_leaves(
        self, client: AsyncClient, act_as, test_project, project_member
    ):
        act_as(project_member)

        response = await client.post(f"/api/projects/{test_project.id}/leave")

        assert response.status_code == status.HTTP_200_OK
        follow_up = await client.get(f"/api/projects/{test_project.id}")
        assert follow_up.status_code == status.HTTP_404_NOT_FOUND


class TestProjectAuthentication:
    @pytest.mark.asyncio
    async def test_missing_token(self, client: AsyncClient):
        response = await client.get("/api/projects/")

        assert response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)

    @pytest.mark.asyncio
    async def test_bearer_token_resolves_user(self, client: AsyncClient, test_user, test_project):
        token = jwt.encode({"sub": str(test_user.id)}, settings.secret_key, algorithm="HS256")

        response = await client.get(
            "/api/projects/", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["total"] == 1

    @pytest.mark.asyncio
    async def test_invalid_token(self, client: AsyncClient):
        response = await client.get(
            "/api/projects/", headers={"Authorization": "Bearer not-a-token"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["message"] == "Invalid authentication token"
