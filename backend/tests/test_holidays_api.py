"""Holiday administration API tests."""
from __future__ import annotations

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_holiday_crud_and_availability(app_context: dict[str, object]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    slug = app_context["tenant_slug"]

    create_resp = await client.post(
        f"/api/v1/t/{slug}/holidays",
        json={"date": "2030-01-07", "reason": " Staff training "},
    )
    assert create_resp.status_code == 201
    holiday = create_resp.json()
    assert holiday["date"] == "2030-01-07"
    assert holiday["reason"] == "Staff training"

    await client.post(f"/api/v1/t/{slug}/holidays", json={"date": "2030-01-01"})
    list_resp = await client.get(f"/api/v1/t/{slug}/holidays")
    assert [item["date"] for item in list_resp.json()] == ["2030-01-01", "2030-01-07"]

    closed = await client.get(f"/api/v1/t/{slug}/slots", params={"date": "2030-01-07"})
    assert closed.json()["slots"] == []

    booking = await client.post(
        f"/api/v1/t/{slug}/bookings",
        json={
            "date": "2030-01-07",
            "start_time": "09:00",
            "end_time": "09:30",
            "first_name": "Noor",
            "last_name": "Haddad",
            "email": "noor@example.com",
        },
    )
    assert booking.status_code == 422

    delete_resp = await client.delete(f"/api/v1/t/{slug}/holidays/{holiday['id']}")
    assert delete_resp.status_code == 204

    reopened = await client.get(
        f"/api/v1/t/{slug}/slots", params={"date": "2030-01-07"}
    )
    assert len(reopened.json()["slots"]) == 16


async def test_duplicate_and_missing_holidays(app_context: dict[str, object]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    slug = app_context["tenant_slug"]

    first = await client.post(f"/api/v1/t/{slug}/holidays", json={"date": "2030-12-25"})
    assert first.status_code == 201
    duplicate = await client.post(
        f"/api/v1/t/{slug}/holidays", json={"date": "2030-12-25"}
    )
    assert duplicate.status_code == 409

    missing = await client.delete(
        f"/api/v1/t/{slug}/holidays/00000000-0000-0000-0000-000000000000"
    )
    assert missing.status_code == 404
