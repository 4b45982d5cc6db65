"""Pydantic v2 request/response schemas for room endpoints."""

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class RoomCreate(BaseModel):
    """Schema for creating a room. New rooms cannot start out occupied."""

    room_number: str = Field(..., min_length=1, max_length=20)
    room_type: str = Field(..., min_length=1, max_length=50)
    base_price: Decimal = Field(..., ge=0)
    status: str = Field("available", pattern="^(available|maintenance)$")
    floor: int = Field(1, ge=0)


class RoomUpdate(BaseModel):
    """Schema for partially updating a room. All fields optional.

    ``occupied`` is owned by the booking and checkout workflows and cannot be
    set by hand.
    """

    room_number: str | None = Field(None, min_length=1, max_length=20)
    room_type: str | None = Field(None, min_length=1, max_length=50)
    base_price: Decimal | None = Field(None, ge=0)
    status: str | None = Field(None, pattern="^(available|maintenance)$")
    floor: int | None = Field(None, ge=0)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class RoomResponse(BaseModel):
    """Room as returned by the API."""

    id: uuid.UUID
    room_number: str
    room_type: str
    base_price: Decimal
    status: str
    floor: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RoomSummary(BaseModel):
    """Compact room reference embedded in guest and payment responses."""

    id: uuid.UUID
    room_number: str
    room_type: str

    model_config = ConfigDict(from_attributes=True)


class RoomListResponse(BaseModel):
    """List of rooms."""

    items: list[RoomResponse]
    total: int


class RoomInconsistencyResponse(BaseModel):
    """A room whose status disagrees with its active guests."""

    room: RoomResponse
    issue: str  # occupied_without_guest, guest_in_unoccupied_room
    active_guest_ids: list[uuid.UUID]
