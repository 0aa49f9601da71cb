"""
Health endpoint tests using pytest-asyncio and httpx.AsyncClient.
"""


async def test_health_endpoint(test_client):
    """The health check reports status, uptime and a database check."""
    response = await test_client.get("/api/v1/health")

    assert response.status_code == 200
    data = response.json()

    assert data["status"] == "ok"
    assert data["uptime"].startswith("PT")
    assert data["version"]
    assert data["checks"] == {"database": "ok"}


async def test_root_health_endpoint(test_client):
    response = await test_client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] in ["ok", "degraded"]
