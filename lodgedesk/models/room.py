"""Room model: lettable rooms of the lodge."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from lodgedesk.database import Base, UUIDPrimaryKeyMixin

ROOM_STATUSES = ("available", "occupied", "maintenance")

class Room(UUIDPrimaryKeyMixin, Base):
    """A single room. Status is flipped by the booking and checkout workflows."""

    __tablename__ = "rooms"

    room_number: Mapped[str] = mapped_column(String(20), unique=True, index=True, nullable=False)
    room_type: Mapped[str] = mapped_column(String(50), nullable=False)  # single, double, deluxe, ...
    base_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20),
        default="available",
        server_default="available",
        index=True,
    )  # available, occupied, maintenance
    floor: Mapped[int] = mapped_column(Integer, default=1, server_default="1")
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(server_default=func.now(), onupdate=func.now())

    def __repr__(self) -> str:
        return f"<Room(id={self.id}, number={self.room_number!r}, status={self.status!r})>"
