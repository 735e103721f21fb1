"""Tests for GET /health: 200, principal required, correlation ID handling."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health_returns_200_with_principal(client: AsyncClient):
    r = await client.get("/health", headers={"X-Principal-ID": "p1"})
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert data["principal_id"] == "p1"


@pytest.mark.asyncio
async def test_principal_header_required(client: AsyncClient):
    r = await client.get("/health")
    assert r.status_code == 400
    assert "detail" in r.json()


@pytest.mark.asyncio
async def test_correlation_id_generated(client: AsyncClient):
    r = await client.get("/health", headers={"X-Principal-ID": "p1"})
    assert len(r.headers["X-Correlation-ID"]) > 0
    assert r.json()["correlation_id"] == r.headers["X-Correlation-ID"]


@pytest.mark.asyncio
async def test_correlation_id_preserved_when_passed(client: AsyncClient):
    r = await client.get(
        "/health",
        headers={"X-Principal-ID": "p1", "X-Correlation-ID": "my-correlation-123"},
    )
    assert r.headers.get("X-Correlation-ID") == "my-correlation-123"
