"""Tests for the checkout workflow."""

import uuid
from datetime import datetime

import pytest
from sqlalchemy.exc import OperationalError

from lodgedesk.errors import ConflictError, DependencyError, GuestNotFound
from lodgedesk.models.payment import Payment
from lodgedesk.schemas.guest import GuestCreate
from lodgedesk.services.booking_service import register_guest
from lodgedesk.services.checkout_service import checkout_guest


async def _register(db, room_id, checkin, checkout, locks, name="Ravi Kumar"):
    data = GuestCreate(
        name=name,
        phone_number="9876543210",
        national_id="XXXX-XXXX-4821",
        checkin_at=datetime.fromisoformat(checkin),
        checkout_at=datetime.fromisoformat(checkout),
        room_id=room_id,
    )
    return await register_guest(db, data, locks=locks)


async def test_checkout_frees_room(db_session, room_101, room_lock_registry):
    guest = await _register(db_session, room_101.id, "2024-01-01T00:00", "2024-01-03T00:00", room_lock_registry)
    assert room_101.status == "occupied"

    result = await checkout_guest(db_session, guest.id, locks=room_lock_registry)

    assert result.status == "checked_out"
    assert room_101.status == "available"


async def test_checkout_keeps_pending_payment(db_session, room_101, room_lock_registry):
    guest = await _register(db_session, room_101.id, "2024-01-01T00:00", "2024-01-03T00:00", room_lock_registry)
    result = await checkout_guest(db_session, guest.id, locks=room_lock_registry)

    payment = await db_session.get(Payment, result.payments[0].id)
    assert payment.status == "pending"


async def test_second_checkout_is_a_conflict(db_session, room_101, room_lock_registry):
    guest = await _register(db_session, room_101.id, "2024-01-01T00:00", "2024-01-03T00:00", room_lock_registry)
    await checkout_guest(db_session, guest.id, locks=room_lock_registry)

    with pytest.raises(ConflictError):
        await checkout_guest(db_session, guest.id, locks=room_lock_registry)


async def test_unknown_guest(db_session, room_lock_registry):
    with pytest.raises(GuestNotFound):
        await checkout_guest(db_session, uuid.uuid4(), locks=room_lock_registry)


async def test_room_stays_occupied_while_another_guest_holds_it(db_session, room_101, room_lock_registry):
    first = await _register(db_session, room_101.id, "2024-01-01T00:00", "2024-01-03T00:00", room_lock_registry)
    await _register(
        db_session, room_101.id, "2024-01-03T00:00", "2024-01-05T00:00", room_lock_registry, name="Next Guest"
    )

    await checkout_guest(db_session, first.id, locks=room_lock_registry)

    assert room_101.status == "occupied"


async def test_checkout_without_room(db_session, room_lock_registry):
    guest = await _register(db_session, None, "2024-01-01T00:00", "2024-01-02T00:00", room_lock_registry)
    result = await checkout_guest(db_session, guest.id, locks=room_lock_registry)
    assert result.status == "checked_out"


async def test_checkout_bill_sms(db_session, room_101, lodge_settings, dispatcher, sms_sender, room_lock_registry):
    guest = await _register(db_session, room_101.id, "2024-01-01T00:00", "2024-01-03T00:00", room_lock_registry)

    await checkout_guest(db_session, guest.id, dispatcher=dispatcher, locks=room_lock_registry)
    await dispatcher.drain()

    assert len(sms_sender.sent) == 1
    text = sms_sender.sent[0].message
    assert "Test Lodge" in text
    assert "2000.00" in text
    assert "2 day" in text


async def test_store_failure_rolls_back_and_raises_dependency_error(
    db_session, room_101, dispatcher, room_lock_registry, monkeypatch
):
    guest = await _register(db_session, room_101.id, "2024-01-01T00:00", "2024-01-03T00:00", room_lock_registry)
    rollbacks = []
    scheduled = []

    async def failing_commit():
        raise OperationalError("COMMIT", {}, Exception("database is locked"))

    async def recording_rollback():
        rollbacks.append(True)

    monkeypatch.setattr(db_session, "commit", failing_commit)
    monkeypatch.setattr(db_session, "rollback", recording_rollback)

    with pytest.raises(DependencyError):
        await checkout_guest(
            db_session,
            guest.id,
            dispatcher=dispatcher,
            schedule=lambda func, *args: scheduled.append(args),
            locks=room_lock_registry,
        )

    assert rollbacks == [True]
    assert scheduled == []
    assert not room_lock_registry.is_locked(room_101.id)
