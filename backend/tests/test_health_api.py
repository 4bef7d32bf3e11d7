"""Tests for health and stats endpoints"""

import pytest
from fastapi import status
from httpx import AsyncClient


@pytest.mark.asyncio
class TestHealthEndpoints:
    """Test health check endpoints"""

    async def test_basic_health_check(self, async_client: AsyncClient):
        response = await async_client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data

    async def test_detailed_health_check(self, async_client: AsyncClient):
        response = await async_client.get("/api/health")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "healthy"
        assert data["services"] == {"database": "connected", "blob_store": "available"}

    async def test_root(self, async_client: AsyncClient):
        response = await async_client.get("/")
        assert response.json()["message"] == "Fieldbook API"


@pytest.mark.asyncio
class TestStatsEndpoint:
    async def test_stats(self, async_client: AsyncClient):
        project = await async_client.post("/api/projects", json={"name": "A", "type": "building"})
        await async_client.post("/api/projects", json={"name": "B", "type": "building", "status": "review"})
        await async_client.post(
            f"/api/projects/{project.json()['id']}/photos",
            files={"photo": ("a.jpg", b"jpeg-bytes", "image/jpeg")},
        )

        response = await async_client.get("/api/stats")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "active_projects": 1,
            "photos_count": 1,
            "pending_inspections": 0,
            "documents_count": 0,
        }
