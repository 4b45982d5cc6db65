"""Guests API router: registration, search, edits and checkout.

Guests are never deleted; checkout only changes their status.
"""

import uuid

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from lodgedesk.api.deps import get_current_active_user, get_db, get_dispatcher
from lodgedesk.models.guest import Guest
from lodgedesk.models.user import User
from lodgedesk.notifications.dispatcher import NotificationDispatcher
from lodgedesk.schemas.guest import (
    GuestCreate,
    GuestDetailResponse,
    GuestListResponse,
    GuestResponse,
    GuestUpdate,
)
from lodgedesk.services import booking_service
from lodgedesk.services.checkout_service import checkout_guest

router = APIRouter(prefix="/api/v1/guests", tags=["guests"])


@router.post(
    "",
    response_model=GuestDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a guest",
)
async def register_guest(
    body: GuestCreate,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
    current_user: User = Depends(get_current_active_user),
) -> Guest:
    """Register a stay, occupy the room and open a pending payment.

    Raises 409 if the room is taken for the dates. The welcome SMS is sent
    after the response and never affects it.
    """
    return await booking_service.register_guest(
        db, body, dispatcher=dispatcher, schedule=background_tasks.add_task
    )


@router.get("", response_model=GuestListResponse, summary="List guests with optional search")
async def list_guests(
    search: str | None = Query(None, description="Search by name, phone or national ID"),
    guest_status: str | None = Query(None, alias="status", pattern="^(active|checked_out)$"),
    room_id: uuid.UUID | None = Query(None, description="Only guests assigned to this room"),
    skip: int = Query(0, ge=0, description="Pagination offset"),
    limit: int = Query(20, ge=1, le=100, description="Pagination limit"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> dict:
    items, total = await booking_service.list_guests(
        db, search=search, status=guest_status, room_id=room_id, skip=skip, limit=limit
    )
    return {"items": items, "total": total}


@router.get("/{guest_id}", response_model=GuestDetailResponse, summary="Get a guest by ID")
async def get_guest(
    guest_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> Guest:
    """Return a guest with room and payment history."""
    return await booking_service.get_guest(db, guest_id)


@router.put("/{guest_id}", response_model=GuestDetailResponse, summary="Update a guest")
async def update_guest(
    guest_id: uuid.UUID,
    body: GuestUpdate,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
    current_user: User = Depends(get_current_active_user),
) -> Guest:
    """Partially update a guest.

    New dates or a new room are checked for availability again and the stay
    amounts recomputed. Sending ``status: checked_out`` checks the guest out.
    """
    return await booking_service.update_guest(
        db, guest_id, body, dispatcher=dispatcher, schedule=background_tasks.add_task
    )


@router.post("/{guest_id}/checkout", response_model=GuestResponse, summary="Check a guest out")
async def checkout(
    guest_id: uuid.UUID,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
    current_user: User = Depends(get_current_active_user),
) -> Guest:
    """End the stay and release the room. Raises 409 if already checked out."""
    return await checkout_guest(db, guest_id, dispatcher=dispatcher, schedule=background_tasks.add_task)
