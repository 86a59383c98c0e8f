"""Tests for request_id and code in error responses."""

from uuid import uuid4

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.integration


async def test_not_found_includes_request_id(client: AsyncClient) -> None:
    response = await client.get("/api/v1/nonexistent-endpoint")

    assert response.status_code == 404
    data = response.json()
    assert "detail" in data
    assert isinstance(data["request_id"], str)
    assert data["request_id"]


async def test_domain_error_includes_code_and_request_id(client: AsyncClient) -> None:
    response = await client.get("/api/v1/users/me")

    assert response.status_code == 401
    data = response.json()
    assert data["code"] == "UNAUTHENTICATED"
    assert data["request_id"] == response.headers["X-Request-ID"]


async def test_validation_error_lists_fields(client: AsyncClient) -> None:
    response = await client.post("/api/v1/sellers/apply", json={"email": "not-an-email"})

    assert response.status_code == 400
    data = response.json()
    assert data["code"] == "VALIDATION_ERROR"
    assert data["request_id"]
    fields = {error["loc"][-1] for error in data["errors"]}
    assert {"name", "email", "vendor_license_number"} <= fields


async def test_incoming_request_id_is_echoed(client: AsyncClient) -> None:
    request_id = uuid4().hex

    response = await client.get("/api/v1/users/me", headers={"X-Request-ID": request_id})

    assert response.json()["request_id"] == request_id


async def test_different_requests_have_different_ids(client: AsyncClient) -> None:
    response1 = await client.get("/api/v1/endpoint1")
    response2 = await client.get("/api/v1/endpoint2")

    assert response1.json()["request_id"] != response2.json()["request_id"]
