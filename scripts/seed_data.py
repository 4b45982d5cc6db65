"""Seed the database with a staff account, lodge settings and sample rooms.

A couple of sample stays are registered through the booking workflow so the
dashboard and payments screens have something to show.

Run from the project root:
    python -m scripts.seed_data
"""

import asyncio
from datetime import timedelta
from decimal import Decimal

from sqlalchemy import select

from lodgedesk.config import settings
from lodgedesk.database import async_session_factory, engine, utcnow
from lodgedesk.models.guest import Guest
from lodgedesk.models.room import Room
from lodgedesk.schemas.guest import GuestCreate
from lodgedesk.schemas.lodge_settings import LodgeSettingsCreate
from lodgedesk.services.auth_service import ensure_admin_user
from lodgedesk.services.booking_service import register_guest
from lodgedesk.services.settings_service import create_lodge_settings, get_lodge_settings

# ---------------------------------------------------------------------------
# Seed data definitions
# ---------------------------------------------------------------------------

LODGE = {
    "name": "Sri Sai Lodge",
    "address": "12 Temple Road, Tirupati, Andhra Pradesh 517501",
    "contact_number": "+918772000000",
    "tax_rate": Decimal("12.00"),
    "discount_rate": Decimal("0.00"),
    "currency": "INR",
    "default_checkin_time": "12:00",
    "default_checkout_time": "11:00",
    "is_setup_complete": True,
}

ROOMS = [
    {"room_number": "101", "room_type": "single", "base_price": Decimal("800.00"), "floor": 1},
    {"room_number": "102", "room_type": "single", "base_price": Decimal("800.00"), "floor": 1},
    {"room_number": "103", "room_type": "double", "base_price": Decimal("1200.00"), "floor": 1},
    {"room_number": "104", "room_type": "double", "base_price": Decimal("1200.00"), "floor": 1},
    {"room_number": "201", "room_type": "double", "base_price": Decimal("1300.00"), "floor": 2},
    {"room_number": "202", "room_type": "deluxe", "base_price": Decimal("2000.00"), "floor": 2},
    {"room_number": "203", "room_type": "deluxe", "base_price": Decimal("2000.00"), "floor": 2},
    {"room_number": "204", "room_type": "suite", "base_price": Decimal("3500.00"), "floor": 2, "status": "maintenance"},
]

# (room number, guest fields, nights)
STAYS = [
    ("103", {"name": "Ravi Kumar", "phone_number": "9876543210", "national_id": "XXXX-XXXX-4821", "purpose_of_visit": "pilgrimage", "number_of_guests": 2}, 2),
    ("202", {"name": "Priya Nair", "phone_number": "9123456780", "national_id": "XXXX-XXXX-1937", "purpose_of_visit": "business", "number_of_guests": 1}, 3),
]


async def seed() -> None:
    """Populate an empty or partly seeded database. Safe to run repeatedly."""
    async with async_session_factory() as session:
        user = await ensure_admin_user(session, settings.admin_username, settings.admin_password)
        print(f"Staff account: {user.username}")

        if await get_lodge_settings(session) is None:
            await create_lodge_settings(session, LodgeSettingsCreate(**LODGE))
            print(f"Lodge settings created: {LODGE['name']}")

        existing = set((await session.execute(select(Room.room_number))).scalars().all())
        rooms: dict[str, Room] = {}
        for room_data in ROOMS:
            if room_data["room_number"] in existing:
                continue
            room = Room(**room_data)
            session.add(room)
            rooms[room.room_number] = room
        await session.commit()
        print(f"Rooms created: {len(rooms)} (already present: {len(existing)})")

        has_guests = (await session.execute(select(Guest.id).limit(1))).first() is not None
        if not has_guests:
            now = utcnow().replace(minute=0, second=0, microsecond=0)
            for room_number, guest_data, nights in STAYS:
                room = rooms.get(room_number)
                if room is None:
                    continue
                guest = await register_guest(
                    session,
                    GuestCreate(
                        **guest_data,
                        room_id=room.id,
                        checkin_at=now - timedelta(hours=3),
                        checkout_at=now - timedelta(hours=3) + timedelta(days=nights),
                    ),
                )
                print(f"Registered {guest.name} in room {room_number}: Rs.{guest.total_amount}")

    await engine.dispose()
    print("Done. Log in at /api/v1/auth/login")


if __name__ == "__main__":
    asyncio.run(seed())
