"""Booking workflow: guest registration and stay edits.

Registration checks availability, then writes the guest, its pending payment
and the room's ``occupied`` flag in one transaction. The availability read and
the room write run under the room's lock so two registrations for the same
room cannot both pass the check.
"""

import logging
import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from lodgedesk.config import settings as app_settings
from lodgedesk.errors import ConflictError, DependencyError, GuestNotFound, InvalidRange, RoomUnavailable
from lodgedesk.models.guest import Guest
from lodgedesk.models.lodge_settings import LodgeSettings
from lodgedesk.models.payment import Payment
from lodgedesk.models.room import Room
from lodgedesk.notifications.dispatcher import NotificationDispatcher, Schedule
from lodgedesk.schemas.guest import GuestCreate, GuestUpdate
from lodgedesk.services.availability import get_available_rooms
from lodgedesk.services.checkout_service import checkout_guest
from lodgedesk.services.locks import RoomLockRegistry, room_locks
from lodgedesk.services.pricing import ONE_DAY, StayCharges, compute_charges, compute_discount, compute_total_days
from lodgedesk.services.room_service import lock_room, release_room_if_vacant
from lodgedesk.services.settings_service import get_lodge_settings

logger = logging.getLogger(__name__)

# Fields that may be cleared with an explicit null on update
_NULLABLE_FIELDS = {"room_id", "checkin_time", "purpose_of_visit"}


def _stay_bounds(checkin: datetime, checkout: datetime) -> tuple[datetime, datetime]:
    """A same-instant stay reserves, and bills, one full day."""
    if checkout < checkin:
        raise InvalidRange("checkout_at must not be before checkin_at")
    if checkout == checkin:
        checkout = checkin + ONE_DAY
    return checkin, checkout


async def _ensure_room_available(
    db: AsyncSession,
    room: Room,
    checkin: datetime,
    checkout: datetime,
    exclude_guest_id: uuid.UUID | None = None,
) -> None:
    if room.status == "maintenance":
        raise RoomUnavailable(f"Room {room.room_number} is under maintenance")
    available = await get_available_rooms(db, checkin, checkout, exclude_guest_id=exclude_guest_id)
    if room.id not in {r.id for r in available}:
        raise RoomUnavailable(f"Room {room.room_number} is not available for the selected dates")


def _charges_for(
    room: Room | None,
    checkin: datetime,
    checkout: datetime,
    data: GuestCreate,
    lodge: LodgeSettings | None,
) -> StayCharges:
    discount_type, discount_value = data.discount_type, data.discount_value
    if discount_type is None and lodge is not None and lodge.discount_rate:
        discount_type, discount_value = "percentage", lodge.discount_rate

    if room is not None:
        return compute_charges(room.base_price, checkin, checkout, discount_type, discount_value)

    # No room: bill whatever the desk entered
    base_amount = data.base_amount or Decimal("0.00")
    discount_amount = compute_discount(base_amount, discount_type, discount_value)
    return StayCharges(
        total_days=compute_total_days(checkin, checkout),
        base_amount=base_amount,
        discount_amount=discount_amount,
        total_amount=base_amount - discount_amount,
    )


def _welcome_variables(guest: Guest, room: Room | None, lodge: LodgeSettings | None, lodge_name: str) -> dict[str, str]:
    checkin_time = guest.checkin_time or (lodge.default_checkin_time if lodge else None) or "12:00"
    return {
        "LODGE_NAME": lodge_name,
        "ROOM_NUMBER": room.room_number if room is not None else "N/A",
        "CHECKIN_DATE": guest.checkin_at.strftime("%d %b %Y"),
        "CHECKIN_TIME": checkin_time,
        "AMOUNT": f"{guest.total_amount:.2f}",
    }


async def register_guest(
    db: AsyncSession,
    data: GuestCreate,
    *,
    dispatcher: NotificationDispatcher | None = None,
    schedule: Schedule | None = None,
    locks: RoomLockRegistry = room_locks,
) -> Guest:
    """Register a stay and return the committed guest.

    Raises:
        RoomNotFound: the requested room does not exist.
        RoomUnavailable: the room is under maintenance or taken for the range.
        DependencyError: the database failed mid-way; nothing is kept.
    """
    checkin, checkout = _stay_bounds(data.checkin_at, data.checkout_at)

    async with locks.hold(data.room_id):
        room = None
        if data.room_id is not None:
            room = await lock_room(db, data.room_id)
            await _ensure_room_available(db, room, checkin, checkout)

        lodge = await get_lodge_settings(db)
        charges = _charges_for(room, checkin, checkout, data, lodge)

        guest = Guest(
            name=data.name,
            phone_number=data.phone_number,
            national_id=data.national_id,
            checkin_at=checkin,
            checkout_at=checkout,
            checkin_time=data.checkin_time or (lodge.default_checkin_time if lodge else None),
            purpose_of_visit=data.purpose_of_visit,
            room_id=data.room_id,
            number_of_guests=data.number_of_guests,
            total_days=charges.total_days,
            base_amount=charges.base_amount,
            discount_amount=charges.discount_amount,
            total_amount=charges.total_amount,
            status="active",
        )
        try:
            db.add(guest)
            await db.flush()

            db.add(
                Payment(
                    guest_id=guest.id,
                    amount=charges.total_amount,
                    payment_method=data.payment_method,
                    status="pending",
                )
            )
            await db.flush()

            if room is not None:
                room.status = "occupied"
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.exception("Registration of %s failed; rolled back", data.name)
            raise DependencyError("Could not save the registration") from e
        await db.refresh(guest)

    logger.info(
        "Guest %s registered in room %s for %d day(s), total %s",
        guest.id,
        room.room_number if room is not None else "-",
        guest.total_days,
        guest.total_amount,
    )

    if dispatcher is not None:
        lodge_name = lodge.name if lodge is not None else app_settings.default_lodge_name
        dispatcher.notify(
            "welcome-booking",
            guest.phone_number,
            _welcome_variables(guest, room, lodge, lodge_name),
            guest.id,
            schedule=schedule,
        )
    return guest


async def get_guest(db: AsyncSession, guest_id: uuid.UUID) -> Guest:
    result = await db.execute(select(Guest).where(Guest.id == guest_id))
    guest = result.scalar_one_or_none()
    if guest is None:
        raise GuestNotFound()
    return guest


async def list_guests(
    db: AsyncSession,
    search: str | None = None,
    status: str | None = None,
    room_id: uuid.UUID | None = None,
    skip: int = 0,
    limit: int = 20,
) -> tuple[list[Guest], int]:
    """Guests newest first, optionally filtered by name, phone or national ID."""
    filters = []
    if search:
        pattern = f"%{search}%"
        filters.append(
            or_(
                Guest.name.ilike(pattern),
                Guest.phone_number.ilike(pattern),
                Guest.national_id.ilike(pattern),
            )
        )
    if status:
        filters.append(Guest.status == status)
    if room_id is not None:
        filters.append(Guest.room_id == room_id)

    total_result = await db.execute(select(func.count()).select_from(Guest).where(*filters))
    total = total_result.scalar_one()

    result = await db.execute(
        select(Guest).where(*filters).order_by(Guest.created_at.desc()).offset(skip).limit(limit)
    )
    return list(result.scalars().all()), total


async def update_guest(
    db: AsyncSession,
    guest_id: uuid.UUID,
    data: GuestUpdate,
    *,
    dispatcher: NotificationDispatcher | None = None,
    schedule: Schedule | None = None,
    locks: RoomLockRegistry = room_locks,
) -> Guest:
    """Partially update a guest.

    Changing the dates or the room re-runs the availability check (ignoring
    the guest's own stay) and recomputes the stay amounts; existing payments
    are left as they are. ``status=checked_out`` runs the checkout workflow.
    """
    guest = await get_guest(db, guest_id)
    update_data = {
        k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None or k in _NULLABLE_FIELDS
    }
    new_status = update_data.pop("status", None)

    if new_status == "active" and guest.status == "checked_out":
        raise ConflictError("A checked-out guest cannot be reactivated; register a new stay")

    stay_changed = any(
        key in update_data and update_data[key] != getattr(guest, key) for key in ("checkin_at", "checkout_at", "room_id")
    )
    if stay_changed and guest.status != "active":
        raise ConflictError("Dates and room of a checked-out guest cannot be changed")

    if stay_changed:
        await _move_stay(db, guest, update_data, locks)
    else:
        for key, value in update_data.items():
            setattr(guest, key, value)
        await db.flush()

    if new_status == "checked_out" and guest.status == "active":
        return await checkout_guest(db, guest.id, dispatcher=dispatcher, schedule=schedule, locks=locks)

    await db.refresh(guest)
    return guest


async def _move_stay(db: AsyncSession, guest: Guest, update_data: dict, locks: RoomLockRegistry) -> None:
    checkin, checkout = _stay_bounds(
        update_data.pop("checkin_at", guest.checkin_at),
        update_data.pop("checkout_at", guest.checkout_at),
    )
    old_room_id = guest.room_id
    new_room_id = update_data.pop("room_id", old_room_id)

    async with locks.hold(new_room_id):
        room = None
        if new_room_id is not None:
            room = await lock_room(db, new_room_id)
            await _ensure_room_available(db, room, checkin, checkout, exclude_guest_id=guest.id)

        total_days = compute_total_days(checkin, checkout)
        if room is not None:
            base_amount = compute_charges(room.base_price, checkin, checkout).base_amount
        else:
            base_amount = guest.base_amount
        discount_amount = min(guest.discount_amount, base_amount)

        for key, value in update_data.items():
            setattr(guest, key, value)
        guest.checkin_at = checkin
        guest.checkout_at = checkout
        guest.room_id = new_room_id
        guest.total_days = total_days
        guest.base_amount = base_amount
        guest.discount_amount = discount_amount
        guest.total_amount = base_amount - discount_amount

        try:
            if room is not None:
                room.status = "occupied"
            await db.flush()
            if old_room_id is not None and old_room_id != new_room_id:
                await release_room_if_vacant(db, old_room_id, leaving_guest_id=guest.id)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.exception("Moving stay of guest %s failed; rolled back", guest.id)
            raise DependencyError("Could not save the stay change") from e

    logger.info("Guest %s stay moved to room %s, %s -> %s", guest.id, new_room_id, checkin, checkout)
