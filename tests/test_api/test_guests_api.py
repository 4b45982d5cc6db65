"""Tests for guest registration, search, edits and checkout endpoints."""

import uuid
from decimal import Decimal

import pytest
from httpx import AsyncClient

from lodgedesk.models.room import Room

pytestmark = pytest.mark.asyncio


def _registration(room: Room | None = None, **overrides) -> dict:
    payload = {
        "name": "Ravi Kumar",
        "phone_number": "9876543210",
        "national_id": "XXXX-XXXX-4821",
        "checkin_at": "2030-01-01T00:00:00",
        "checkout_at": "2030-01-03T00:00:00",
        "room_id": str(room.id) if room is not None else None,
        **overrides,
    }
    return payload


async def _register(client: AsyncClient, headers: dict, room: Room | None = None, **overrides) -> dict:
    response = await client.post("/api/v1/guests", json=_registration(room, **overrides), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestRegisterGuest:
    async def test_register_computes_bill_and_occupies_room(
        self, client: AsyncClient, auth_headers: dict, room_101: Room
    ) -> None:
        data = await _register(
            client, auth_headers, room_101, discount_type="percentage", discount_value="10"
        )
        assert data["status"] == "active"
        assert data["total_days"] == 2
        assert Decimal(data["base_amount"]) == Decimal("2000")
        assert Decimal(data["discount_amount"]) == Decimal("200")
        assert Decimal(data["total_amount"]) == Decimal("1800")
        assert data["room"]["room_number"] == "101"
        assert len(data["payments"]) == 1
        assert data["payments"][0]["status"] == "pending"
        assert Decimal(data["payments"][0]["amount"]) == Decimal("1800")

        room = await client.get(f"/api/v1/rooms/{room_101.id}", headers=auth_headers)
        assert room.json()["status"] == "occupied"

    async def test_welcome_sms_sent_after_response(
        self, client: AsyncClient, auth_headers: dict, room_101: Room, lodge_settings, sms_sender
    ) -> None:
        await _register(client, auth_headers, room_101)

        assert len(sms_sender.sent) == 1
        sms = sms_sender.sent[0]
        assert sms.to == "+919876543210"
        assert sms.message.startswith("Welcome to Test Lodge!")
        assert "Room: 101" in sms.message
        assert "01 Jan 2030" in sms.message

    async def test_sms_failure_does_not_fail_registration(
        self, client: AsyncClient, auth_headers: dict, room_101: Room, sms_sender
    ) -> None:
        sms_sender.raise_with = RuntimeError("provider down")
        data = await _register(client, auth_headers, room_101)
        assert data["status"] == "active"

    async def test_overlapping_registration_conflicts(
        self, client: AsyncClient, auth_headers: dict, room_101: Room
    ) -> None:
        await _register(client, auth_headers, room_101)

        response = await client.post(
            "/api/v1/guests",
            json=_registration(room_101, checkin_at="2030-01-02T00:00:00", checkout_at="2030-01-04T00:00:00"),
            headers=auth_headers,
        )
        assert response.status_code == 409
        assert response.json()["code"] == "room_unavailable"

        listing = await client.get("/api/v1/guests", headers=auth_headers)
        assert listing.json()["total"] == 1

    async def test_unknown_room(self, client: AsyncClient, auth_headers: dict) -> None:
        response = await client.post(
            "/api/v1/guests",
            json=_registration(room_id=str(uuid.uuid4())),
            headers=auth_headers,
        )
        assert response.status_code == 404
        assert response.json()["code"] == "room_not_found"

    async def test_checkout_before_checkin_rejected(self, client: AsyncClient, auth_headers: dict) -> None:
        response = await client.post(
            "/api/v1/guests",
            json=_registration(checkin_at="2030-01-03T00:00:00", checkout_at="2030-01-01T00:00:00"),
            headers=auth_headers,
        )
        assert response.status_code == 400

    async def test_missing_fields_rejected(self, client: AsyncClient, auth_headers: dict) -> None:
        response = await client.post("/api/v1/guests", json={"name": "No Phone"}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["code"] == "validation_error"


class TestListAndGet:
    async def test_search_by_name_phone_and_id(
        self, client: AsyncClient, auth_headers: dict, make_room
    ) -> None:
        room_a = await make_room("101")
        room_b = await make_room("102")
        await _register(client, auth_headers, room_a, name="Ravi Kumar")
        await _register(
            client, auth_headers, room_b, name="Anita Desai", phone_number="9123456780", national_id="PASS-778"
        )

        for term, expected in (("anita", "Anita Desai"), ("91234", "Anita Desai"), ("4821", "Ravi Kumar")):
            response = await client.get("/api/v1/guests", params={"search": term}, headers=auth_headers)
            assert response.status_code == 200
            data = response.json()
            assert data["total"] == 1, term
            assert data["items"][0]["name"] == expected

    async def test_filter_by_status(self, client: AsyncClient, auth_headers: dict, room_101: Room) -> None:
        guest = await _register(client, auth_headers, room_101)
        await client.post(f"/api/v1/guests/{guest['id']}/checkout", headers=auth_headers)

        response = await client.get("/api/v1/guests", params={"status": "active"}, headers=auth_headers)
        assert response.json()["total"] == 0
        response = await client.get("/api/v1/guests", params={"status": "checked_out"}, headers=auth_headers)
        assert response.json()["total"] == 1

    async def test_get_guest_with_payments(self, client: AsyncClient, auth_headers: dict, room_101: Room) -> None:
        guest = await _register(client, auth_headers, room_101)
        response = await client.get(f"/api/v1/guests/{guest['id']}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["payments"][0]["id"] == guest["payments"][0]["id"]

    async def test_get_unknown_guest(self, client: AsyncClient, auth_headers: dict) -> None:
        response = await client.get(f"/api/v1/guests/{uuid.uuid4()}", headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["code"] == "guest_not_found"


class TestUpdateAndCheckout:
    async def test_update_contact_details(self, client: AsyncClient, auth_headers: dict, room_101: Room) -> None:
        guest = await _register(client, auth_headers, room_101)
        response = await client.put(
            f"/api/v1/guests/{guest['id']}",
            json={"phone_number": "9000011111", "purpose_of_visit": "business"},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert response.json()["phone_number"] == "9000011111"
        assert response.json()["purpose_of_visit"] == "business"

    async def test_extend_stay(self, client: AsyncClient, auth_headers: dict, room_101: Room) -> None:
        guest = await _register(client, auth_headers, room_101)
        response = await client.put(
            f"/api/v1/guests/{guest['id']}",
            json={"checkout_at": "2030-01-05T00:00:00"},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert response.json()["total_days"] == 4
        assert Decimal(response.json()["total_amount"]) == Decimal("4000")

    async def test_checkout_frees_room_and_sends_bill(
        self, client: AsyncClient, auth_headers: dict, room_101: Room, sms_sender
    ) -> None:
        guest = await _register(client, auth_headers, room_101)

        response = await client.post(f"/api/v1/guests/{guest['id']}/checkout", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["status"] == "checked_out"

        room = await client.get(f"/api/v1/rooms/{room_101.id}", headers=auth_headers)
        assert room.json()["status"] == "available"
        assert "final bill: Rs.2000.00 (2 days)" in sms_sender.sent[-1].message

    async def test_checkout_twice_conflicts(self, client: AsyncClient, auth_headers: dict, room_101: Room) -> None:
        guest = await _register(client, auth_headers, room_101)
        await client.post(f"/api/v1/guests/{guest['id']}/checkout", headers=auth_headers)

        response = await client.post(f"/api/v1/guests/{guest['id']}/checkout", headers=auth_headers)
        assert response.status_code == 409

    async def test_checkout_via_status_update(self, client: AsyncClient, auth_headers: dict, room_101: Room) -> None:
        guest = await _register(client, auth_headers, room_101)
        response = await client.put(
            f"/api/v1/guests/{guest['id']}", json={"status": "checked_out"}, headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json()["status"] == "checked_out"
