"""Tests for project API endpoints"""

import pytest
from fastapi import status
from httpx import AsyncClient


async def create_project(client: AsyncClient, **overrides) -> dict:
    payload = {"name": "Harbor Tower", "type": "building", "location": "Pier 4"}
    payload.update(overrides)
    response = await client.post("/api/projects", json=payload)
    assert response.status_code == status.HTTP_201_CREATED
    return response.json()


@pytest.mark.asyncio
class TestCreateProject:
    """Test POST /api/projects endpoint"""

    async def test_create_project_success(self, async_client: AsyncClient):
        project = await create_project(async_client)

        assert project["name"] == "Harbor Tower"
        assert project["status"] == "active"
        assert project["created_at"] == "2024-11-04T10:00:00"
        assert project["updated_at"] == project["created_at"]

    async def test_create_project_validation_error(self, async_client: AsyncClient):
        response = await async_client.post("/api/projects", json={"name": "", "type": "castle"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        data = response.json()
        assert data["type"] == "urn:fieldbook:errors:validation_error"
        assert data["status"] == 400
        assert {error["field"] for error in data["errors"]} == {"name", "type"}

    async def test_client_id_is_ignored(self, async_client: AsyncClient):
        project = await create_project(async_client, id="chosen-by-client")
        assert project["id"] != "chosen-by-client"


@pytest.mark.asyncio
class TestGetProjects:
    """Test GET /api/projects endpoints"""

    async def test_list_with_derived_fields(self, async_client: AsyncClient):
        project = await create_project(async_client)
        await async_client.post(
            "/api/reminders",
            json={
                "project_id": project["id"],
                "title": "599 inspection",
                "type": "599",
                "scheduled_for": "2024-11-05T11:00:00",
            },
        )

        response = await async_client.get("/api/projects")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert len(data) == 1
        assert data[0]["photo_count"] == 0
        assert data[0]["document_count"] == 0
        assert data[0]["next_inspection"] == "Tomorrow"

    async def test_get_project(self, async_client: AsyncClient):
        project = await create_project(async_client)

        response = await async_client.get(f"/api/projects/{project['id']}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["next_inspection"] is None

    async def test_get_project_not_found(self, async_client: AsyncClient):
        response = await async_client.get("/api/projects/missing")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        data = response.json()
        assert data["type"] == "urn:fieldbook:errors:not_found"
        assert data["instance"] == "/api/projects/missing"


@pytest.mark.asyncio
class TestUpdateProject:
    """Test PATCH /api/projects/{id} endpoint"""

    async def test_partial_update(self, async_client: AsyncClient, clock):
        project = await create_project(async_client)
        clock.advance(minutes=10)

        response = await async_client.patch(f"/api/projects/{project['id']}", json={"status": "complete"})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "complete"
        assert data["location"] == "Pier 4"
        assert data["updated_at"] == "2024-11-04T10:10:00"

    async def test_null_name_rejected(self, async_client: AsyncClient):
        project = await create_project(async_client)

        response = await async_client.patch(f"/api/projects/{project['id']}", json={"name": None})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    async def test_update_missing(self, async_client: AsyncClient):
        response = await async_client.patch("/api/projects/missing", json={"name": "X"})
        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
class TestDeleteProject:
    """Test DELETE /api/projects/{id} endpoint"""

    async def test_delete_cascades(self, async_client: AsyncClient):
        project = await create_project(async_client)
        upload = await async_client.post(
            f"/api/projects/{project['id']}/photos",
            files={"photo": ("site.jpg", b"jpeg-bytes", "image/jpeg")},
        )
        photo_id = upload.json()["id"]

        response = await async_client.delete(f"/api/projects/{project['id']}")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert (await async_client.get(f"/api/projects/{project['id']}")).status_code == 404
        assert (await async_client.get(f"/api/photos/{photo_id}")).status_code == 404

    async def test_delete_missing(self, async_client: AsyncClient):
        response = await async_client.delete("/api/projects/missing")
        assert response.status_code == status.HTTP_404_NOT_FOUND
