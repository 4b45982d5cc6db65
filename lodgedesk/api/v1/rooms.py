"""Rooms API router: CRUD, availability search and status reconciliation."""

import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from lodgedesk.api.deps import get_current_active_user, get_db
from lodgedesk.models.room import Room
from lodgedesk.models.user import User
from lodgedesk.schemas.auth import MessageResponse
from lodgedesk.schemas.common import to_naive_utc
from lodgedesk.schemas.room import (
    RoomCreate,
    RoomInconsistencyResponse,
    RoomListResponse,
    RoomResponse,
    RoomUpdate,
)
from lodgedesk.services import room_service
from lodgedesk.services.availability import get_available_rooms

router = APIRouter(prefix="/api/v1/rooms", tags=["rooms"])


@router.get("", response_model=RoomListResponse, summary="List rooms")
async def list_rooms(
    room_status: str | None = Query(
        None, alias="status", pattern="^(available|occupied|maintenance)$", description="Filter by status"
    ),
    room_type: str | None = Query(None, description="Filter by room type"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> dict:
    """Return all rooms ordered by room number."""
    rooms = await room_service.list_rooms(db, status=room_status, room_type=room_type)
    return {"items": rooms, "total": len(rooms)}


@router.get("/available", response_model=RoomListResponse, summary="Rooms free for a date range")
async def available_rooms(
    checkin: datetime = Query(..., description="Start of the stay (inclusive)"),
    checkout: datetime = Query(..., description="End of the stay (exclusive)"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> dict:
    """Rooms that can take a new guest for ``[checkin, checkout)``.

    Maintenance rooms are never listed. A room flagged occupied is left out
    only when the range includes the present moment.
    """
    rooms = await get_available_rooms(db, to_naive_utc(checkin), to_naive_utc(checkout))
    return {"items": rooms, "total": len(rooms)}


@router.get(
    "/inconsistencies",
    response_model=list[RoomInconsistencyResponse],
    summary="Rooms whose status disagrees with their guests",
)
async def room_inconsistencies(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[RoomInconsistencyResponse]:
    issues = await room_service.find_room_inconsistencies(db)
    return [RoomInconsistencyResponse.model_validate(issue, from_attributes=True) for issue in issues]


@router.post("", response_model=RoomResponse, status_code=status.HTTP_201_CREATED, summary="Create a room")
async def create_room(
    body: RoomCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> Room:
    """Create a room. Raises 409 if the room number is taken."""
    return await room_service.create_room(db, body)


@router.get("/{room_id}", response_model=RoomResponse, summary="Get a room by ID")
async def get_room(
    room_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> Room:
    return await room_service.get_room(db, room_id)


@router.put("/{room_id}", response_model=RoomResponse, summary="Update a room")
async def update_room(
    room_id: uuid.UUID,
    body: RoomUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> Room:
    """Partially update a room. Only explicitly provided fields are changed."""
    return await room_service.update_room(db, room_id, body)


@router.delete("/{room_id}", response_model=MessageResponse, summary="Delete a room")
async def delete_room(
    room_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> dict:
    """Delete a room. Raises 409 while a guest is staying in it."""
    await room_service.delete_room(db, room_id)
    return {"message": "Room deleted"}
