"""Smoke tests for health, readiness and app wiring."""

from unittest.mock import AsyncMock

from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from app.api.v1.dependencies import get_db
from app.main import app


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200, status ok and the version."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["version"]


async def test_ready_when_database_answers(client: AsyncClient) -> None:
    """Cache is reported unavailable without lifespan, but readiness still passes."""
    session = AsyncMock()

    async def _db():
        yield session

    app.dependency_overrides[get_db] = _db
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "ok", "cache": "unavailable"}
    session.execute.assert_awaited_once()


async def test_not_ready_when_database_fails(client: AsyncClient) -> None:
    session = AsyncMock()
    session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("down"))

    async def _db():
        yield session

    app.dependency_overrides[get_db] = _db
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 503
    assert response.json()["database"] == "unavailable"


async def test_security_and_request_id_headers(client: AsyncClient) -> None:
    """Every response carries security headers and echoes X-Request-ID."""
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-Request-ID"] == "req-123"


async def test_request_id_generated_when_missing(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health")
    assert response.headers.get("X-Request-ID")
