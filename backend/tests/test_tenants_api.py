"""Tenant provisioning and lookup tests."""
from __future__ import annotations

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_create_tenant_and_duplicate_slug(
    app_context: dict[str, object],
) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]

    create_resp = await client.post(
        "/api/v1/tenants",
        json={"slug": "Barber-Shop", "name": "Barber Shop", "email": "cut@example.com"},
    )
    assert create_resp.status_code == 201
    body = create_resp.json()
    assert body["slug"] == "barber-shop"
    assert body["timezone"] == "Europe/Zurich"

    duplicate = await client.post(
        "/api/v1/tenants", json={"slug": "barber-shop", "name": "Other"}
    )
    assert duplicate.status_code == 409

    fetched = await client.get("/api/v1/tenants/BARBER-SHOP")
    assert fetched.status_code == 200
    assert fetched.json()["id"] == body["id"]


async def test_unknown_tenant_is_not_found(app_context: dict[str, object]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]

    for path in (
        "/api/v1/tenants/nobody",
        "/api/v1/t/nobody/settings",
        "/api/v1/t/nobody/slots?date=2030-01-07",
        "/api/v1/t/nobody/bookings",
        "/api/v1/t/nobody/holidays",
    ):
        response = await client.get(path)
        assert response.status_code == 404, path


async def test_invalid_slug_is_rejected(app_context: dict[str, object]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]

    response = await client.post(
        "/api/v1/tenants", json={"slug": "no spaces", "name": "Broken"}
    )
    assert response.status_code == 422
