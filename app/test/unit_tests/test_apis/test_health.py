"""
API tests for the unauthenticated service endpoints.
"""

import pytest
from httpx import ASGITransport, AsyncClient


@pytest.mark.asyncio
async def test_health_check(test_app):
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://testserver") as client:
        response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "household-energy-tracker"}


@pytest.mark.asyncio
async def test_root(test_app, test_config):
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://testserver") as client:
        response = await client.get("/")

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == test_config.section("api")["title"]
    assert data["docs"] == "/docs"
