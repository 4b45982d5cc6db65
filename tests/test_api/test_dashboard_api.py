"""Tests for the analytics dashboard endpoint."""

from decimal import Decimal

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_empty_dashboard(client: AsyncClient, auth_headers: dict) -> None:
    response = await client.get("/api/v1/analytics/dashboard", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["total_rooms"] == 0
    assert data["active_guests"] == 0
    assert Decimal(data["today_revenue"]) == Decimal("0")


async def test_dashboard_counts(client: AsyncClient, auth_headers: dict, make_room) -> None:
    room = await make_room("101")
    await make_room("102", status="maintenance")
    await make_room("103")

    response = await client.post(
        "/api/v1/guests",
        json={
            "name": "Ravi Kumar",
            "phone_number": "9876543210",
            "national_id": "XXXX-XXXX-4821",
            "checkin_at": "2030-01-01T00:00:00",
            "checkout_at": "2030-01-03T00:00:00",
            "room_id": str(room.id),
        },
        headers=auth_headers,
    )
    payment_id = response.json()["payments"][0]["id"]

    data = (await client.get("/api/v1/analytics/dashboard", headers=auth_headers)).json()
    assert data["available_rooms"] == 1
    assert data["occupied_rooms"] == 1
    assert data["maintenance_rooms"] == 1
    assert data["total_rooms"] == 3
    assert data["active_guests"] == 1
    assert data["pending_payments"] == 1

    await client.post(f"/api/v1/payments/{payment_id}/pay", json={"payment_method": "cash"}, headers=auth_headers)

    data = (await client.get("/api/v1/analytics/dashboard", headers=auth_headers)).json()
    assert data["pending_payments"] == 0
    assert Decimal(data["today_revenue"]) == Decimal("2000")


async def test_dashboard_requires_auth(client: AsyncClient) -> None:
    response = await client.get("/api/v1/analytics/dashboard")
    assert response.status_code == 401
