"""Tests for notification endpoints."""

import uuid

import pytest
from httpx import AsyncClient

from lodgedesk.models.room import Room

pytestmark = pytest.mark.asyncio

WELCOME_VARS = {
    "LODGE_NAME": "Sri Sai Lodge",
    "ROOM_NUMBER": "101",
    "CHECKIN_DATE": "01 Jan 2030",
    "CHECKIN_TIME": "12:00",
    "AMOUNT": "2000.00",
}


class TestTemplates:
    async def test_list_templates(self, client: AsyncClient, auth_headers: dict) -> None:
        response = await client.get("/api/v1/notifications/templates", headers=auth_headers)
        assert response.status_code == 200
        ids = {t["id"] for t in response.json()}
        assert ids == {"welcome-booking", "payment-confirmation", "checkout-bill", "payment-reminder"}


class TestSend:
    async def test_send_template(self, client: AsyncClient, auth_headers: dict, sms_sender) -> None:
        response = await client.post(
            "/api/v1/notifications/send-template",
            json={"template_id": "welcome-booking", "phone_number": "98765 43210", "variables": WELCOME_VARS},
            headers=auth_headers,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message_id"] == "msg-1"
        assert sms_sender.sent[0].to == "+919876543210"
        assert "Room: 101" in sms_sender.sent[0].message

    async def test_unknown_template(self, client: AsyncClient, auth_headers: dict, sms_sender) -> None:
        response = await client.post(
            "/api/v1/notifications/send-template",
            json={"template_id": "nope", "phone_number": "9876543210", "variables": {}},
            headers=auth_headers,
        )
        assert response.status_code == 404
        assert response.json()["code"] == "template_not_found"
        assert sms_sender.sent == []

    async def test_missing_variables(self, client: AsyncClient, auth_headers: dict, sms_sender) -> None:
        response = await client.post(
            "/api/v1/notifications/send-template",
            json={
                "template_id": "welcome-booking",
                "phone_number": "9876543210",
                "variables": {"LODGE_NAME": "Sri Sai Lodge"},
            },
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert response.json()["code"] == "missing_variables"
        assert "ROOM_NUMBER" in response.json()["detail"]
        assert sms_sender.sent == []

    async def test_channel_failure_reported_in_body(self, client: AsyncClient, auth_headers: dict, sms_sender) -> None:
        sms_sender.fail_with = "Invalid number"
        response = await client.post(
            "/api/v1/notifications/send-message",
            json={"phone_number": "9876543210", "message": "Your bill is Rs.500"},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert response.json()["success"] is False
        assert response.json()["error"] == "Invalid number"

    async def test_sixth_message_in_window_is_refused(self, client: AsyncClient, auth_headers: dict) -> None:
        payload = {"phone_number": "9876543210", "message": "hello"}
        for _ in range(5):
            response = await client.post("/api/v1/notifications/send-message", json=payload, headers=auth_headers)
            assert response.status_code == 200
        response = await client.post("/api/v1/notifications/send-message", json=payload, headers=auth_headers)
        assert response.status_code == 429


class TestHistoryAndStats:
    async def test_history_for_guest(self, client: AsyncClient, auth_headers: dict, room_101: Room) -> None:
        response = await client.post(
            "/api/v1/guests",
            json={
                "name": "Ravi Kumar",
                "phone_number": "9876543210",
                "national_id": "XXXX-XXXX-4821",
                "checkin_at": "2030-01-01T00:00:00",
                "checkout_at": "2030-01-03T00:00:00",
                "room_id": str(room_101.id),
            },
            headers=auth_headers,
        )
        guest_id = response.json()["id"]

        response = await client.get(f"/api/v1/notifications/history/{guest_id}", headers=auth_headers)
        assert response.status_code == 200
        history = response.json()
        assert len(history) == 1
        assert history[0]["template_id"] == "welcome-booking"
        assert history[0]["status"] == "sent"

        response = await client.get(f"/api/v1/notifications/history/{uuid.uuid4()}", headers=auth_headers)
        assert response.json() == []

    async def test_stats(self, client: AsyncClient, auth_headers: dict, sms_sender) -> None:
        payload = {"phone_number": "9876543210", "message": "hello"}
        await client.post("/api/v1/notifications/send-message", json=payload, headers=auth_headers)
        sms_sender.fail_with = "Undeliverable"
        await client.post("/api/v1/notifications/send-message", json=payload, headers=auth_headers)

        response = await client.get("/api/v1/notifications/stats", params={"days": 1}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {"days": 1, "total_sent": 1, "total_failed": 1, "success_rate": 50.0}

    async def test_stats_empty(self, client: AsyncClient, auth_headers: dict) -> None:
        response = await client.get("/api/v1/notifications/stats", headers=auth_headers)
        assert response.json()["success_rate"] == 0.0
