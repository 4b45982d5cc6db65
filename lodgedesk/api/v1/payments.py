"""Payments API router: listing, manual entries and staff confirmation.

There is no payment gateway: staff mark payments paid once cash or a QR
transfer has been verified.
"""

import uuid

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from lodgedesk.api.deps import get_current_active_user, get_db, get_dispatcher
from lodgedesk.models.payment import Payment
from lodgedesk.models.user import User
from lodgedesk.notifications.dispatcher import NotificationDispatcher, NotificationResult
from lodgedesk.schemas.notification import NotificationResultResponse
from lodgedesk.schemas.payment import (
    PaymentCreate,
    PaymentListResponse,
    PaymentPayRequest,
    PaymentResponse,
    PaymentUpdate,
    PaymentWithGuestResponse,
)
from lodgedesk.services import payment_service

router = APIRouter(prefix="/api/v1/payments", tags=["payments"])


@router.get("", response_model=PaymentListResponse, summary="List payments")
async def list_payments(
    payment_status: str | None = Query(None, alias="status", pattern="^(pending|paid)$"),
    guest_id: uuid.UUID | None = Query(None, description="Only payments of this guest"),
    skip: int = Query(0, ge=0, description="Pagination offset"),
    limit: int = Query(50, ge=1, le=200, description="Pagination limit"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> dict:
    """Payments newest first, with guest name, phone and room number."""
    items, total = await payment_service.list_payments(
        db, status=payment_status, guest_id=guest_id, skip=skip, limit=limit
    )
    return {"items": [payment_service.payment_view(p) for p in items], "total": total}


@router.get("/pending", response_model=PaymentListResponse, summary="List pending payments")
async def list_pending_payments(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> dict:
    items, total = await payment_service.list_payments(db, status="pending", limit=500)
    return {"items": [payment_service.payment_view(p) for p in items], "total": total}


@router.post(
    "",
    response_model=PaymentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a payment for a guest",
)
async def create_payment(
    body: PaymentCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> Payment:
    return await payment_service.create_payment(db, body)


@router.get("/{payment_id}", response_model=PaymentWithGuestResponse, summary="Get a payment by ID")
async def get_payment(
    payment_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> dict:
    payment = await payment_service.get_payment(db, payment_id)
    return payment_service.payment_view(payment)


@router.put("/{payment_id}", response_model=PaymentResponse, summary="Correct a payment")
async def update_payment(
    payment_id: uuid.UUID,
    body: PaymentUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> Payment:
    return await payment_service.update_payment(db, payment_id, body)


@router.post("/{payment_id}/pay", response_model=PaymentResponse, summary="Mark a payment as paid")
async def mark_paid(
    payment_id: uuid.UUID,
    body: PaymentPayRequest,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
    current_user: User = Depends(get_current_active_user),
) -> Payment:
    """Record the payment as received and text the guest a receipt.

    Calling this again on a paid payment returns it unchanged.
    """
    return await payment_service.mark_payment_paid(
        db, payment_id, body.payment_method, dispatcher=dispatcher, schedule=background_tasks.add_task
    )


@router.post(
    "/{payment_id}/remind",
    response_model=NotificationResultResponse,
    summary="Text the guest a payment reminder",
)
async def remind(
    payment_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
    current_user: User = Depends(get_current_active_user),
) -> NotificationResult:
    """Send the reminder now. Raises 409 for a settled payment, 429 when throttled."""
    return await payment_service.send_payment_reminder(db, payment_id, dispatcher)
