"""Room service: CRUD guards, status release and reconciliation."""

import logging
import uuid
from dataclasses import dataclass, field

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from lodgedesk.errors import ConflictError, DuplicateRoomNumber, RoomNotFound
from lodgedesk.models.guest import Guest
from lodgedesk.models.room import Room
from lodgedesk.schemas.room import RoomCreate, RoomUpdate

logger = logging.getLogger(__name__)


@dataclass
class RoomInconsistency:
    room: Room
    issue: str  # occupied_without_guest, guest_in_unoccupied_room
    active_guest_ids: list[uuid.UUID] = field(default_factory=list)


async def list_rooms(
    db: AsyncSession,
    status: str | None = None,
    room_type: str | None = None,
) -> list[Room]:
    query = select(Room).order_by(Room.room_number)
    if status:
        query = query.where(Room.status == status)
    if room_type:
        query = query.where(Room.room_type == room_type)
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_room(db: AsyncSession, room_id: uuid.UUID) -> Room:
    result = await db.execute(select(Room).where(Room.id == room_id))
    room = result.scalar_one_or_none()
    if room is None:
        raise RoomNotFound()
    return room


async def lock_room(db: AsyncSession, room_id: uuid.UUID) -> Room:
    """Load a room with a row lock, refreshing any copy already in the session."""
    result = await db.execute(
        select(Room).where(Room.id == room_id).with_for_update().execution_options(populate_existing=True)
    )
    room = result.scalar_one_or_none()
    if room is None:
        raise RoomNotFound()
    return room


async def _ensure_number_free(db: AsyncSession, room_number: str, exclude_room_id: uuid.UUID | None = None) -> None:
    query = select(Room.id).where(Room.room_number == room_number)
    if exclude_room_id is not None:
        query = query.where(Room.id != exclude_room_id)
    result = await db.execute(query)
    if result.first() is not None:
        raise DuplicateRoomNumber(f"Room number {room_number} already exists")


async def create_room(db: AsyncSession, data: RoomCreate) -> Room:
    await _ensure_number_free(db, data.room_number)

    room = Room(**data.model_dump())
    db.add(room)
    try:
        await db.flush()
    except IntegrityError as e:
        raise DuplicateRoomNumber(f"Room number {data.room_number} already exists") from e
    await db.refresh(room)
    logger.info("Room %s created (%s)", room.room_number, room.room_type)
    return room


async def update_room(db: AsyncSession, room_id: uuid.UUID, data: RoomUpdate) -> Room:
    """Partially update a room.

    Only ``available`` and ``maintenance`` can be set here; an occupied room
    keeps its status until its guest checks out.
    """
    room = await get_room(db, room_id)
    update_data = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}

    if "room_number" in update_data and update_data["room_number"] != room.room_number:
        await _ensure_number_free(db, update_data["room_number"], exclude_room_id=room.id)

    if "status" in update_data and update_data["status"] != room.status and room.status == "occupied":
        raise ConflictError(f"Room {room.room_number} is occupied; check the guest out first")

    for key, value in update_data.items():
        setattr(room, key, value)

    try:
        await db.flush()
    except IntegrityError as e:
        raise DuplicateRoomNumber(f"Room number {room.room_number} already exists") from e
    await db.refresh(room)
    return room


async def count_active_guests(
    db: AsyncSession,
    room_id: uuid.UUID,
    exclude_guest_id: uuid.UUID | None = None,
) -> int:
    query = select(func.count()).select_from(Guest).where(Guest.room_id == room_id, Guest.status == "active")
    if exclude_guest_id is not None:
        query = query.where(Guest.id != exclude_guest_id)
    result = await db.execute(query)
    return result.scalar_one()


async def delete_room(db: AsyncSession, room_id: uuid.UUID) -> None:
    room = await get_room(db, room_id)
    if room.status == "occupied" or await count_active_guests(db, room.id):
        raise ConflictError(f"Room {room.room_number} has an active guest and cannot be deleted")

    await db.delete(room)
    await db.flush()
    logger.info("Room %s deleted", room.room_number)


async def release_room_if_vacant(
    db: AsyncSession,
    room_id: uuid.UUID,
    leaving_guest_id: uuid.UUID,
) -> bool:
    """Mark the room available unless another active guest still holds it."""
    room = await db.get(Room, room_id)
    if room is None or room.status != "occupied":
        return False
    if await count_active_guests(db, room_id, exclude_guest_id=leaving_guest_id):
        return False
    room.status = "available"
    return True


async def find_room_inconsistencies(db: AsyncSession) -> list[RoomInconsistency]:
    """Rooms whose status disagrees with their active guests.

    ``occupied_without_guest``: flagged occupied, no active guest assigned.
    ``guest_in_unoccupied_room``: an active guest is assigned but the room is not occupied.
    """
    rooms = await list_rooms(db)
    result = await db.execute(
        select(Guest.room_id, Guest.id).where(Guest.status == "active", Guest.room_id.is_not(None))
    )
    holders: dict[uuid.UUID, list[uuid.UUID]] = {}
    for room_id, guest_id in result.all():
        holders.setdefault(room_id, []).append(guest_id)

    issues = []
    for room in rooms:
        guest_ids = holders.get(room.id, [])
        if room.status == "occupied" and not guest_ids:
            issues.append(RoomInconsistency(room, "occupied_without_guest"))
        elif room.status != "occupied" and guest_ids:
            issues.append(RoomInconsistency(room, "guest_in_unoccupied_room", guest_ids))

    if issues:
        logger.warning("Found %d room status inconsistencies", len(issues))
    return issues
