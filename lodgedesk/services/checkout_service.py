"""Checkout workflow: end a stay and hand the room back."""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from lodgedesk.errors import ConflictError, DependencyError, GuestNotFound
from lodgedesk.models.guest import Guest
from lodgedesk.notifications.dispatcher import NotificationDispatcher, Schedule
from lodgedesk.services.locks import RoomLockRegistry, room_locks
from lodgedesk.services.room_service import release_room_if_vacant
from lodgedesk.services.settings_service import get_lodge_name

logger = logging.getLogger(__name__)


async def checkout_guest(
    db: AsyncSession,
    guest_id: uuid.UUID,
    *,
    dispatcher: NotificationDispatcher | None = None,
    schedule: Schedule | None = None,
    locks: RoomLockRegistry = room_locks,
) -> Guest:
    """Mark the guest checked out and free their room.

    The room goes back to ``available`` only when no other active guest is
    still assigned to it. Pending payments do not block checkout.
    """
    result = await db.execute(select(Guest).where(Guest.id == guest_id))
    guest = result.scalar_one_or_none()
    if guest is None:
        raise GuestNotFound()
    if guest.status == "checked_out":
        raise ConflictError("Guest has already checked out")

    async with locks.hold(guest.room_id):
        try:
            guest.status = "checked_out"
            await db.flush()
            released = False
            if guest.room_id is not None:
                released = await release_room_if_vacant(db, guest.room_id, leaving_guest_id=guest.id)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.exception("Checkout of guest %s failed; rolled back", guest_id)
            raise DependencyError("Could not save the checkout") from e
        await db.refresh(guest)

    logger.info("Guest %s checked out (room released: %s)", guest.id, released)

    if dispatcher is not None:
        dispatcher.notify(
            "checkout-bill",
            guest.phone_number,
            {
                "LODGE_NAME": await get_lodge_name(db),
                "TOTAL_AMOUNT": f"{guest.total_amount:.2f}",
                "DAYS": str(guest.total_days),
            },
            guest.id,
            schedule=schedule,
        )
    return guest
