"""Guest domain model: one row per stay registration."""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import ForeignKey, Index, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lodgedesk.database import Base, UUIDPrimaryKeyMixin

GUEST_STATUSES = ("active", "checked_out")


class Guest(UUIDPrimaryKeyMixin, Base):
    """A registered stay. Never deleted; checkout only flips ``status``."""

    __tablename__ = "guests"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone_number: Mapped[str] = mapped_column(String(30), nullable=False, index=True)
    national_id: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    checkin_at: Mapped[datetime] = mapped_column(nullable=False)
    checkin_time: Mapped[str | None] = mapped_column(String(5))  # HH:MM
    checkout_at: Mapped[datetime] = mapped_column(nullable=False)
    purpose_of_visit: Mapped[str | None] = mapped_column(String(50))
    # Weak reference: the guest does not own the room's lifecycle
    room_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("rooms.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    number_of_guests: Mapped[int] = mapped_column(Integer, default=1, server_default="1")
    total_days: Mapped[int] = mapped_column(Integer, default=1, server_default="1")
    base_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0.00"))
    discount_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0.00"))
    total_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20),
        default="active",
        server_default="active",
        index=True,
    )  # active, checked_out
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())

    # Relationships
    room: Mapped["Room | None"] = relationship(lazy="selectin")  # type: ignore[name-defined]  # noqa: F821
    payments: Mapped[list["Payment"]] = relationship(  # type: ignore[name-defined]  # noqa: F821
        back_populates="guest", lazy="selectin", order_by="Payment.created_at"
    )

    __table_args__ = (Index("ix_guests_room_stay", "room_id", "checkin_at", "checkout_at"),)

    def __repr__(self) -> str:
        return f"<Guest(id={self.id}, name={self.name!r}, room_id={self.room_id}, status={self.status!r})>"
