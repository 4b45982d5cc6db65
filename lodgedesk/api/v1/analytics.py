"""Analytics API router: front-desk dashboard numbers."""

from __future__ import annotations

from datetime import datetime, time
from decimal import Decimal

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from lodgedesk.api.deps import get_current_active_user, get_db
from lodgedesk.database import utcnow
from lodgedesk.models.guest import Guest
from lodgedesk.models.payment import Payment
from lodgedesk.models.room import Room
from lodgedesk.models.user import User
from lodgedesk.schemas.analytics import DashboardResponse

router = APIRouter(prefix="/api/v1/analytics", tags=["analytics"])


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> DashboardResponse:
    """Room counts by status, active guests, pending payments and today's takings.

    "Today" is the current UTC calendar day; revenue counts payments marked
    paid since midnight.
    """
    status_result = await db.execute(select(Room.status, func.count()).group_by(Room.status))
    rooms_by_status: dict[str, int] = dict(status_result.all())

    active_result = await db.execute(select(func.count()).select_from(Guest).where(Guest.status == "active"))
    pending_result = await db.execute(select(func.count()).select_from(Payment).where(Payment.status == "pending"))

    midnight = datetime.combine(utcnow().date(), time.min)
    revenue_result = await db.execute(
        select(func.coalesce(func.sum(Payment.amount), 0)).where(
            Payment.status == "paid",
            Payment.paid_at >= midnight,
        )
    )

    return DashboardResponse(
        available_rooms=rooms_by_status.get("available", 0),
        occupied_rooms=rooms_by_status.get("occupied", 0),
        maintenance_rooms=rooms_by_status.get("maintenance", 0),
        total_rooms=sum(rooms_by_status.values()),
        active_guests=active_result.scalar_one(),
        pending_payments=pending_result.scalar_one(),
        today_revenue=Decimal(str(revenue_result.scalar_one())).quantize(Decimal("0.01")),
    )
