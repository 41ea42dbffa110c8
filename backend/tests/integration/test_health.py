"""Tests for the health check endpoint."""

import pytest
from httpx import ASGITransport, AsyncClient

from app.main import app


@pytest.mark.asyncio
async def test_health_check_returns_200():
    """Health endpoint should return 200 with status, version, and environment."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data
    assert "environment" in data
    assert data["generationStrategy"] in {"structured", "markdown"}


@pytest.mark.asyncio
async def test_unknown_api_route_returns_json_404(client):
    response = await client.get("/api/does-not-exist")

    assert response.status_code == 404
    assert "error" in response.json()
