"""Lodge settings: a single row created during onboarding."""

from decimal import Decimal

from sqlalchemy import Boolean, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from lodgedesk.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class LodgeSettings(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Lodge identity, billing defaults and SMS wording."""

    __tablename__ = "lodge_settings"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    contact_number: Mapped[str] = mapped_column(String(30), nullable=False)
    tax_rate: Mapped[Decimal] = mapped_column(Numeric(5, 2), default=Decimal("18.00"), server_default="18.00")
    discount_rate: Mapped[Decimal] = mapped_column(Numeric(5, 2), default=Decimal("0.00"), server_default="0.00")
    currency: Mapped[str] = mapped_column(String(10), default="INR", server_default="INR")
    sms_template: Mapped[str | None] = mapped_column(Text, nullable=True)
    default_checkin_time: Mapped[str] = mapped_column(String(5), default="12:00", server_default="12:00")
    default_checkout_time: Mapped[str] = mapped_column(String(5), default="11:00", server_default="11:00")
    is_setup_complete: Mapped[bool] = mapped_column(Boolean, default=False, server_default="false")

    def __repr__(self) -> str:
        return f"<LodgeSettings(id={self.id}, name={self.name!r})>"
