"""Tests for the unauthenticated health endpoint."""

import pytest
from httpx import ASGITransport, AsyncClient

from backoffice.config import get_settings
from backoffice.main import app


@pytest.mark.asyncio
async def test_health_needs_no_admin_header():
    settings = get_settings()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
    }


@pytest.mark.asyncio
async def test_unknown_route_is_404_not_envelope():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/nope")

    assert response.status_code == 404
