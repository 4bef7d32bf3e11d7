"""Tests for reminder, calendar and material test API endpoints"""

import pytest
import pytest_asyncio
from fastapi import status
from httpx import AsyncClient


@pytest_asyncio.fixture
async def project_id(async_client: AsyncClient) -> str:
    response = await async_client.post("/api/projects", json={"name": "Depot", "type": "building"})
    return response.json()["id"]


async def create_reminder(client: AsyncClient, project_id: str, scheduled_for: str, title="Inspection") -> dict:
    response = await client.post(
        "/api/reminders",
        json={"project_id": project_id, "title": title, "type": "sw3p", "scheduled_for": scheduled_for},
    )
    assert response.status_code == status.HTTP_201_CREATED
    return response.json()


@pytest.mark.asyncio
class TestReminderEndpoints:
    """Test reminder endpoints"""

    async def test_active_reminders(self, async_client: AsyncClient, project_id: str):
        later = await create_reminder(async_client, project_id, "2024-11-10T09:00:00", "Later")
        sooner = await create_reminder(async_client, project_id, "2024-11-06T09:00:00", "Sooner")

        response = await async_client.get("/api/reminders")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert [r["id"] for r in data] == [sooner["id"], later["id"]]
        assert data[0]["project_name"] == "Depot"

    async def test_complete_twice(self, async_client: AsyncClient, project_id: str):
        reminder = await create_reminder(async_client, project_id, "2024-11-06T09:00:00")

        first = await async_client.patch(f"/api/reminders/{reminder['id']}/complete")
        second = await async_client.patch(f"/api/reminders/{reminder['id']}/complete")

        assert first.status_code == status.HTTP_204_NO_CONTENT
        assert second.status_code == status.HTTP_204_NO_CONTENT
        assert (await async_client.get("/api/reminders")).json() == []

        project_reminders = await async_client.get(f"/api/projects/{project_id}/reminders")
        assert project_reminders.json()[0]["completed"] is True

    async def test_complete_missing(self, async_client: AsyncClient):
        response = await async_client.patch("/api/reminders/missing/complete")
        assert response.status_code == status.HTTP_404_NOT_FOUND

    async def test_cannot_uncomplete(self, async_client: AsyncClient, project_id: str):
        reminder = await create_reminder(async_client, project_id, "2024-11-06T09:00:00")
        await async_client.patch(f"/api/reminders/{reminder['id']}/complete")

        response = await async_client.patch(f"/api/reminders/{reminder['id']}", json={"completed": False})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["errors"][0]["field"] == "completed"

    async def test_unknown_project(self, async_client: AsyncClient):
        response = await async_client.post(
            "/api/reminders",
            json={"project_id": "missing", "title": "X", "type": "599", "scheduled_for": "2024-11-06T09:00:00"},
        )
        assert response.status_code == status.HTTP_409_CONFLICT


@pytest.mark.asyncio
class TestCalendarEndpoints:
    """Test calendar event endpoints"""

    async def test_month_filter(self, async_client: AsyncClient, project_id: str):
        for title, date in [("Nov", "2024-11-15T09:00:00"), ("Dec", "2024-12-02T09:00:00")]:
            response = await async_client.post(
                "/api/calendar/events",
                json={"project_id": project_id, "title": title, "date": date, "type": "inspection"},
            )
            assert response.status_code == status.HTTP_201_CREATED

        response = await async_client.get("/api/calendar/events", params={"month": 11, "year": 2024})

        assert [e["title"] for e in response.json()] == ["Nov"]
        assert response.json()[0]["project_name"] == "Depot"
        assert len((await async_client.get("/api/calendar/events")).json()) == 2

    async def test_invalid_month(self, async_client: AsyncClient):
        response = await async_client.get("/api/calendar/events", params={"month": 13, "year": 2024})
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["errors"][0]["field"] == "month"

    async def test_january_is_month_one(self, async_client: AsyncClient, project_id: str):
        await async_client.post(
            "/api/calendar/events",
            json={"project_id": project_id, "title": "Kickoff", "date": "2025-01-06T09:00:00", "type": "visit"},
        )

        january = await async_client.get("/api/calendar/events", params={"month": 1, "year": 2025})
        month_zero = await async_client.get("/api/calendar/events", params={"month": 0, "year": 2025})

        assert [e["title"] for e in january.json()] == ["Kickoff"]
        assert month_zero.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.asyncio
class TestMaterialEndpoints:
    """Test material test catalogue and results"""

    async def test_results_with_names(self, async_client: AsyncClient, project_id: str):
        created = await async_client.post(
            "/api/material-tests",
            json={"name": "Slump", "category": "concrete", "specification": "4 in max"},
        )
        test_id = created.json()["id"]

        result = await async_client.post(
            "/api/test-results",
            json={"project_id": project_id, "material_test_id": test_id, "result": "3.5 in", "status": "pass"},
        )
        assert result.status_code == status.HTTP_201_CREATED

        listing = await async_client.get("/api/test-results", params={"project_id": project_id})
        assert listing.json()[0]["test_name"] == "Slump"
        assert listing.json()[0]["project_name"] == "Depot"

        refused = await async_client.delete(f"/api/material-tests/{test_id}")
        assert refused.status_code == status.HTTP_409_CONFLICT

    async def test_category_filter(self, async_client: AsyncClient):
        await async_client.post(
            "/api/material-tests",
            json={"name": "Density", "category": "soil", "specification": "95%"},
        )

        concrete = await async_client.get("/api/material-tests", params={"category": "concrete"})
        soil = await async_client.get("/api/material-tests", params={"category": "soil"})

        assert concrete.json() == []
        assert [t["name"] for t in soil.json()] == ["Density"]
