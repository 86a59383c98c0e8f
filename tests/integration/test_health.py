"""Tests for the health endpoint."""

from unittest.mock import patch

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.integration


async def test_health_reports_database_and_payments(client: AsyncClient) -> None:
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "healthy",
        "database": "healthy",
        "payments": "not_configured",
    }


async def test_health_unhealthy_database(client: AsyncClient) -> None:
    with patch("src.app.api.health.get_session", side_effect=RuntimeError("connection refused")):
        response = await client.get("/health")

    assert response.status_code == 503
    data = response.json()
    assert data["status"] == "unhealthy"
    assert data["database"].startswith("unhealthy")
