"""Room availability engine.

A room is offered for ``[checkin, checkout)`` unless:

- it is under maintenance (never offered, whatever the range), or
- an active guest assigned to it has a stay overlapping the range, or
- the range contains the current instant and the room is flagged ``occupied``
  by someone other than the guest whose stay is being edited.

``occupied`` describes the room *right now*; for any range that does not
include now, guest intervals are the only booking signal. Intervals are
half-open, so a stay ending exactly when another starts is not a conflict.
"""

from __future__ import annotations

import uuid
from collections.abc import Collection, Iterable
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lodgedesk.database import utcnow
from lodgedesk.errors import InvalidRange
from lodgedesk.models.guest import Guest
from lodgedesk.models.room import Room
from lodgedesk.services.room_service import count_active_guests


def stays_overlap(
    stay_checkin: datetime,
    stay_checkout: datetime,
    checkin: datetime,
    checkout: datetime,
) -> bool:
    """Half-open interval overlap: touching endpoints do not conflict."""
    return stay_checkin < checkout and stay_checkout > checkin


def ensure_valid_range(checkin: datetime, checkout: datetime) -> None:
    if checkin >= checkout:
        raise InvalidRange("checkout must be after checkin")


def compute_available_rooms(
    rooms: Iterable[Room],
    active_guests: Iterable[Guest],
    checkin: datetime,
    checkout: datetime,
    now: datetime,
    vacated_room_ids: Collection[uuid.UUID] = (),
) -> list[Room]:
    """Return the rooms free for ``[checkin, checkout)``, sorted by room number.

    Pure function over a snapshot; ``active_guests`` may contain guests that
    do not overlap the range, they are filtered here. ``vacated_room_ids`` are
    rooms whose ``occupied`` flag belongs only to the stay being edited.
    """
    ensure_valid_range(checkin, checkout)

    busy_room_ids: set[uuid.UUID] = {
        guest.room_id
        for guest in active_guests
        if guest.room_id is not None
        and guest.status == "active"
        and stays_overlap(guest.checkin_at, guest.checkout_at, checkin, checkout)
    }
    range_includes_now = checkin <= now < checkout

    available = []
    for room in rooms:
        if room.status == "maintenance" or room.id in busy_room_ids:
            continue
        if range_includes_now and room.status == "occupied" and room.id not in vacated_room_ids:
            continue
        available.append(room)

    return sorted(available, key=lambda r: r.room_number)


async def get_available_rooms(
    db: AsyncSession,
    checkin: datetime,
    checkout: datetime,
    *,
    now: datetime | None = None,
    exclude_guest_id: uuid.UUID | None = None,
) -> list[Room]:
    """Load the current snapshot and compute availability for the range.

    ``exclude_guest_id`` ignores one guest's own stay, used when that guest's
    dates or room are being edited. If that guest is the only active one in
    their room, the room's ``occupied`` flag is theirs and is ignored too.
    """
    ensure_valid_range(checkin, checkout)

    rooms_result = await db.execute(select(Room).where(Room.status != "maintenance"))
    rooms = list(rooms_result.scalars().all())

    guests_query = select(Guest).where(
        Guest.status == "active",
        Guest.room_id.is_not(None),
        Guest.checkin_at < checkout,
        Guest.checkout_at > checkin,
    )
    if exclude_guest_id is not None:
        guests_query = guests_query.where(Guest.id != exclude_guest_id)
    guests_result = await db.execute(guests_query)
    guests = list(guests_result.scalars().all())

    vacated: set[uuid.UUID] = set()
    if exclude_guest_id is not None:
        excluded = await db.get(Guest, exclude_guest_id)
        if excluded is not None and excluded.status == "active" and excluded.room_id is not None:
            if not await count_active_guests(db, excluded.room_id, exclude_guest_id=excluded.id):
                vacated.add(excluded.room_id)

    return compute_available_rooms(rooms, guests, checkin, checkout, now or utcnow(), vacated)
