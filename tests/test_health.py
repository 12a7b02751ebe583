"""Tests for health check endpoints."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from app.main import app


@pytest.fixture
def client() -> TestClient:
    """Create test client."""
    return TestClient(app)


def test_health_check(client: TestClient) -> None:
    """Test health endpoint returns healthy status in the envelope."""
    response = client.get("/api/health")
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["status"] == "healthy"
    assert body["data"]["service"] == "catalog-api"
    assert "version" in body["data"]


def test_readiness_check(client: TestClient) -> None:
    """Test readiness endpoint returns ready status in the envelope."""
    response = client.get("/api/ready")
    assert response.status_code == 200
    assert response.json() == {"success": True, "data": {"status": "ready"}}


def test_readiness_check_without_database(client: TestClient, monkeypatch) -> None:
    """Test readiness endpoint reports 503 when the database is down."""

    async def unreachable() -> bool:
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    monkeypatch.setattr("app.api.health.check_connection", unreachable)

    response = client.get("/api/ready")
    assert response.status_code == 503
    assert response.json() == {
        "success": False,
        "message": "Database not reachable",
        "error": "SERVICE_UNAVAILABLE",
    }
