"""Tests for lodge settings endpoints."""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

ONBOARDING = {
    "name": "Sri Sai Lodge",
    "address": "12 Temple Street",
    "contact_number": "+919812345678",
    "discount_rate": "5.00",
}


class TestSettings:
    async def test_get_before_onboarding(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/settings")
        assert response.status_code == 404
        assert response.json()["code"] == "settings_not_found"

    async def test_onboarding_flow(self, client: AsyncClient, auth_headers: dict) -> None:
        response = await client.post("/api/v1/settings", json=ONBOARDING, headers=auth_headers)
        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Sri Sai Lodge"
        assert data["currency"] == "INR"
        assert data["default_checkin_time"] == "12:00"
        assert data["is_setup_complete"] is False

        # readable without a token
        response = await client.get("/api/v1/settings")
        assert response.status_code == 200
        assert response.json()["id"] == data["id"]

    async def test_second_create_conflicts(self, client: AsyncClient, auth_headers: dict, lodge_settings) -> None:
        response = await client.post("/api/v1/settings", json=ONBOARDING, headers=auth_headers)
        assert response.status_code == 409

    async def test_update(self, client: AsyncClient, auth_headers: dict, lodge_settings) -> None:
        response = await client.put(
            "/api/v1/settings",
            json={"default_checkin_time": "14:00", "is_setup_complete": True},
            headers=auth_headers,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["default_checkin_time"] == "14:00"
        assert data["is_setup_complete"] is True
        assert data["name"] == "Test Lodge"

    async def test_bad_time_rejected(self, client: AsyncClient, auth_headers: dict, lodge_settings) -> None:
        response = await client.put(
            "/api/v1/settings", json={"default_checkin_time": "25:00"}, headers=auth_headers
        )
        assert response.status_code == 400

    async def test_writes_require_auth(self, client: AsyncClient) -> None:
        response = await client.post("/api/v1/settings", json=ONBOARDING)
        assert response.status_code == 401
