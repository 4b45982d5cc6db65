"""Notification audit trail. Rows are append-only."""

import uuid
from datetime import datetime

from sqlalchemy import ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from lodgedesk.database import Base, UUIDPrimaryKeyMixin

NOTIFICATION_STATUSES = ("pending", "sent", "failed")


class NotificationLog(UUIDPrimaryKeyMixin, Base):
    """One SMS attempt and its outcome."""

    __tablename__ = "notification_logs"

    guest_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("guests.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    phone_number: Mapped[str] = mapped_column(String(30), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    template_id: Mapped[str | None] = mapped_column(String(50))
    status: Mapped[str] = mapped_column(String(20), default="pending", index=True)  # pending, sent, failed
    provider_message_id: Mapped[str | None] = mapped_column(String(100))
    error: Mapped[str | None] = mapped_column(Text)
    sent_at: Mapped[datetime] = mapped_column(server_default=func.now(), index=True)

    def __repr__(self) -> str:
        return f"<NotificationLog(id={self.id}, phone={self.phone_number!r}, status={self.status!r})>"
