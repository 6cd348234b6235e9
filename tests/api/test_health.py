"""API tests for health endpoints."""

import aiosqlite
import pytest
from httpx import ASGITransport, AsyncClient

from src.api.main import app
from src.infrastructure.storage import sqlite as sqlite_module


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


class TestHealthAPI:
    async def test_root_health(self, client: AsyncClient):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_database_probe(self, ledger_db, client: AsyncClient):
        response = await client.get("/api/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"]["available"] is True

    async def test_unreachable_database_is_503(self, client: AsyncClient, monkeypatch):
        async def broken_pool():
            raise aiosqlite.OperationalError("unable to open database file")

        monkeypatch.setattr(sqlite_module, "get_connection_pool", broken_pool)

        response = await client.get("/api/health")
        assert response.status_code == 503
        body = response.json()
        assert body["status"] == "unhealthy"
        assert "unable to open" in body["database"]["error"]
