"""Shared fixtures for API tests."""

import pytest
from fastapi.testclient import TestClient

from app.main import app

from tests.factories import ADMIN_EMAIL, ADMIN_NAME, ADMIN_PASSWORD


@pytest.fixture
def client() -> TestClient:
    """Create test client without authentication."""
    return TestClient(app)


@pytest.fixture
def admin_token(client: TestClient) -> str:
    """Register an admin and return its session token."""
    response = client.post(
        "/api/auth/register",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD, "name": ADMIN_NAME},
    )
    assert response.status_code == 201
    return response.json()["data"]["token"]


@pytest.fixture
def auth_headers(admin_token: str) -> dict[str, str]:
    """Get authentication headers."""
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def auth_client(admin_token: str) -> TestClient:
    """Create test client with a valid admin token."""
    return TestClient(
        app,
        headers={"Authorization": f"Bearer {admin_token}"},
    )
