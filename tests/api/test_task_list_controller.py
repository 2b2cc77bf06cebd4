"""API tests for the task list controller."""

import pytest
from fastapi import status
from httpx import AsyncClient


class TestTaskListController:
    @pytest.mark.asyncio
    async def test_create_task_list(self, authenticated_client: AsyncClient, test_project):
        response = await authenticated_client.post(
            "/api/tasklists/", json={"name": "Backlog", "project_id": str(test_project.id)}
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()["data"]
        assert data["position"] == 1
        assert data["project_name"] == "Test Project"

    @pytest.mark.asyncio
    async def test_create_rejects_zero_position(
        self, authenticated_client: AsyncClient, test_project
    ):
        response = await authenticated_client.post(
            "/api/tasklists/",
            json={"name": "Backlog", "project_id": str(test_project.id), "position": 0},
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    @pytest.mark.asyncio
    async def test_lists_by_project(self, authenticated_client: AsyncClient, test_project, task_lists):
        response = await authenticated_client.get(f"/api/tasklists/project/{test_project.id}")

        assert response.status_code == status.HTTP_200_OK
        names = [tl["name"] for tl in response.json()["data"]["task_lists"]]
        assert names == ["Backlog", "Doing", "Done"]

    @pytest.mark.asyncio
    async def test_get_task_list_with_tasks(
        self, authenticated_client: AsyncClient, test_task_list, tasks
    ):
        response = await authenticated_client.get(f"/api/tasklists/{test_task_list.id}")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["task_count"] == 3
        assert [t["position"] for t in data["tasks"]] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_reorder(self, authenticated_client: AsyncClient, test_project, task_lists):
        response = await authenticated_client.put(
            f"/api/tasklists/{task_lists[2].id}", json={"position": 1}
        )
        assert response.status_code == status.HTTP_200_OK

        board = await authenticated_client.get(f"/api/tasklists/project/{test_project.id}")
        lists = board.json()["data"]["task_lists"]
        assert [(tl["name"], tl["position"]) for tl in lists] == [
            ("Done", 1),
            ("Backlog", 2),
            ("Doing", 3),
        ]

    @pytest.mark.asyncio
    async def test_delete_middle_list(
        self, authenticated_client: AsyncClient, test_project, task_lists
    ):
        response = await authenticated_client.delete(f"/api/tasklists/{task_lists[1].id}")
        assert response.status_code == status.HTTP_200_OK

        board = await authenticated_client.get(f"/api/tasklists/project/{test_project.id}")
        lists = board.json()["data"]["task_lists"]
        assert [tl["position"] for tl in lists] == [1, 2]

    @pytest.mark.asyncio
    async def test_outsider(self, client: AsyncClient, act_as, test_task_list, outsider):
        act_as(outsider)

        read = await client.get(f"/api/tasklists/{test_task_list.id}")
        write = await client.put(f"/api/tasklists/{test_task_list.id}", json={"name": "Nope"})

        assert read.status_code == status.HTTP_404_NOT_FOUND
        assert write.status_code == status.HTTP_403_FORBIDDEN
