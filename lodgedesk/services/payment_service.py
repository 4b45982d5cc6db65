"""Payment service: listing, manual entries, mark-paid and reminders."""

import logging
import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from lodgedesk.database import utcnow
from lodgedesk.errors import ConflictError, GuestNotFound, PaymentNotFound
from lodgedesk.models.guest import Guest
from lodgedesk.models.payment import Payment
from lodgedesk.notifications.dispatcher import NotificationDispatcher, NotificationResult, Schedule
from lodgedesk.schemas.payment import PaymentCreate, PaymentUpdate
from lodgedesk.services.settings_service import get_lodge_name

logger = logging.getLogger(__name__)


def payment_view(payment: Payment) -> dict:
    """Payment fields plus the guest's name and phone and the room number."""
    guest = payment.guest
    room = guest.room if guest is not None else None
    return {
        "id": payment.id,
        "guest_id": payment.guest_id,
        "amount": payment.amount,
        "payment_method": payment.payment_method,
        "status": payment.status,
        "created_at": payment.created_at,
        "paid_at": payment.paid_at,
        "guest": {"name": guest.name, "phone_number": guest.phone_number} if guest is not None else None,
        "room": {"room_number": room.room_number} if room is not None else None,
    }


async def get_payment(db: AsyncSession, payment_id: uuid.UUID) -> Payment:
    result = await db.execute(select(Payment).where(Payment.id == payment_id))
    payment = result.scalar_one_or_none()
    if payment is None:
        raise PaymentNotFound()
    return payment


async def list_payments(
    db: AsyncSession,
    status: str | None = None,
    guest_id: uuid.UUID | None = None,
    skip: int = 0,
    limit: int = 50,
) -> tuple[list[Payment], int]:
    filters = []
    if status:
        filters.append(Payment.status == status)
    if guest_id is not None:
        filters.append(Payment.guest_id == guest_id)

    total_result = await db.execute(select(func.count()).select_from(Payment).where(*filters))
    total = total_result.scalar_one()

    result = await db.execute(
        select(Payment).where(*filters).order_by(Payment.created_at.desc()).offset(skip).limit(limit)
    )
    return list(result.scalars().all()), total


async def create_payment(db: AsyncSession, data: PaymentCreate) -> Payment:
    """Record an extra charge or a settlement against an existing guest."""
    guest = await db.get(Guest, data.guest_id)
    if guest is None:
        raise GuestNotFound()

    payment = Payment(**data.model_dump())
    if payment.status == "paid":
        payment.paid_at = utcnow()
    db.add(payment)
    await db.flush()
    await db.refresh(payment)
    logger.info("Payment %s of %s added for guest %s (%s)", payment.id, payment.amount, guest.id, payment.status)
    return payment


async def update_payment(db: AsyncSession, payment_id: uuid.UUID, data: PaymentUpdate) -> Payment:
    """Correct a payment. Status changes keep ``paid_at`` in step."""
    payment = await get_payment(db, payment_id)
    update_data = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}

    new_status = update_data.get("status")
    if new_status == "paid" and payment.status != "paid":
        payment.paid_at = utcnow()
    elif new_status == "pending":
        payment.paid_at = None

    for key, value in update_data.items():
        setattr(payment, key, value)
    await db.flush()
    await db.refresh(payment)
    return payment


async def mark_payment_paid(
    db: AsyncSession,
    payment_id: uuid.UUID,
    payment_method: str,
    *,
    dispatcher: NotificationDispatcher | None = None,
    schedule: Schedule | None = None,
) -> Payment:
    """Record that staff received the money.

    Marking an already paid payment again changes nothing and sends nothing.
    """
    payment = await get_payment(db, payment_id)
    if payment.status == "paid":
        logger.info("Payment %s already paid; ignoring", payment.id)
        return payment

    payment.status = "paid"
    payment.payment_method = payment_method
    payment.paid_at = utcnow()
    await db.commit()
    await db.refresh(payment)
    logger.info("Payment %s marked paid via %s", payment.id, payment_method)

    guest = payment.guest
    if dispatcher is not None and guest is not None:
        dispatcher.notify(
            "payment-confirmation",
            guest.phone_number,
            {
                "AMOUNT": f"{payment.amount:.2f}",
                "PAYMENT_METHOD": payment_method.upper(),
                "ROOM_NUMBER": guest.room.room_number if guest.room is not None else "N/A",
                "RECEIPT_ID": payment.id.hex[:8].upper(),
                "LODGE_NAME": await get_lodge_name(db),
            },
            guest.id,
            schedule=schedule,
        )
    return payment


async def send_payment_reminder(
    db: AsyncSession,
    payment_id: uuid.UUID,
    dispatcher: NotificationDispatcher,
) -> NotificationResult:
    """Send the pending-payment reminder now and return the delivery result."""
    payment = await get_payment(db, payment_id)
    if payment.status == "paid":
        raise ConflictError("Payment is already settled")

    guest = payment.guest
    return await dispatcher.send(
        "payment-reminder",
        guest.phone_number,
        {
            "AMOUNT": f"{payment.amount:.2f}",
            "LODGE_NAME": await get_lodge_name(db),
            "ROOM_NUMBER": guest.room.room_number if guest.room is not None else "N/A",
        },
        guest.id,
    )
