"""Payment model: manually confirmed by staff."""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import ForeignKey, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lodgedesk.database import Base, UUIDPrimaryKeyMixin

PAYMENT_METHODS = ("cash", "qr")
PAYMENT_STATUSES = ("pending", "paid")


class Payment(UUIDPrimaryKeyMixin, Base):
    """An amount owed by a guest. A guest may accumulate several."""

    __tablename__ = "payments"

    guest_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("guests.id"),
        nullable=False,
        index=True,
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    payment_method: Mapped[str] = mapped_column(String(20), default="cash", server_default="cash")  # cash, qr
    status: Mapped[str] = mapped_column(
        String(20),
        default="pending",
        server_default="pending",
        index=True,
    )  # pending, paid
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())
    paid_at: Mapped[datetime | None] = mapped_column(nullable=True)

    # Relationships
    guest: Mapped["Guest"] = relationship(back_populates="payments", lazy="selectin")  # type: ignore[name-defined]  # noqa: F821

    def __repr__(self) -> str:
        return f"<Payment(id={self.id}, guest_id={self.guest_id}, amount={self.amount}, status={self.status!r})>"
