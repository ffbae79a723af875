"""Health endpoint tests."""

import pytest

from users_api import __version__


@pytest.mark.asyncio
async def test_health_connected(test_client):
    response = await test_client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["database"] == "connected"
    assert body["version"] == __version__
    assert body["uptime_seconds"] >= 0


@pytest.mark.asyncio
async def test_health_database_unreachable(test_client, fake_mongo):
    fake_mongo.reachable = False

    response = await test_client.get("/health")

    assert response.status_code == 503
    assert response.json()["status"] == "unhealthy"
    assert response.json()["database"] == "disconnected"
