"""Notification history and delivery statistics."""

import uuid
from dataclasses import dataclass
from datetime import timedelta

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from lodgedesk.database import utcnow
from lodgedesk.models.notification_log import NotificationLog


@dataclass(frozen=True)
class NotificationStats:
    days: int
    total_sent: int
    total_failed: int
    success_rate: float  # percent, 0 when nothing was attempted


async def get_guest_history(db: AsyncSession, guest_id: uuid.UUID, limit: int = 50) -> list[NotificationLog]:
    result = await db.execute(
        select(NotificationLog)
        .where(NotificationLog.guest_id == guest_id)
        .order_by(NotificationLog.sent_at.desc())
        .limit(limit)
    )
    return list(result.scalars().all())


async def get_stats(db: AsyncSession, days: int = 7) -> NotificationStats:
    since = utcnow() - timedelta(days=days)
    result = await db.execute(
        select(NotificationLog.status, func.count())
        .where(NotificationLog.sent_at >= since)
        .group_by(NotificationLog.status)
    )
    counts = dict(result.all())
    sent = counts.get("sent", 0)
    failed = counts.get("failed", 0)
    attempted = sent + failed
    return NotificationStats(
        days=days,
        total_sent=sent,
        total_failed=failed,
        success_rate=round(sent * 100 / attempted, 2) if attempted else 0.0,
    )
