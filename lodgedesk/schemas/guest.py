"""Pydantic v2 request/response schemas for guest endpoints."""

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from lodgedesk.schemas.common import TIME_OF_DAY_PATTERN, NaiveUTCDatetime
from lodgedesk.schemas.payment import PaymentResponse
from lodgedesk.schemas.room import RoomSummary

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class GuestCreate(BaseModel):
    """Registration request. Amounts are computed server-side from the room price."""

    name: str = Field(..., min_length=1, max_length=255)
    phone_number: str = Field(..., min_length=5, max_length=30)
    national_id: str = Field(..., min_length=1, max_length=50)
    checkin_at: NaiveUTCDatetime
    checkout_at: NaiveUTCDatetime
    checkin_time: str | None = Field(None, pattern=TIME_OF_DAY_PATTERN)
    purpose_of_visit: str | None = Field(None, max_length=50)
    room_id: uuid.UUID | None = None
    number_of_guests: int = Field(1, ge=1)
    discount_type: str | None = Field(None, pattern="^(percentage|flat)$")
    discount_value: Decimal | None = Field(None, ge=0)
    # Only used when no room is assigned (walk-in record without a room charge)
    base_amount: Decimal | None = Field(None, ge=0)
    payment_method: str = Field("cash", pattern="^(cash|qr)$")

    @model_validator(mode="after")
    def check_dates_and_discount(self) -> "GuestCreate":
        """Check-out may not precede check-in; discounts need both type and value."""
        if self.checkout_at < self.checkin_at:
            raise ValueError("checkout_at must not be before checkin_at")
        if (self.discount_type is None) != (self.discount_value is None):
            raise ValueError("discount_type and discount_value must be given together")
        if self.discount_type == "percentage" and self.discount_value > 100:
            raise ValueError("percentage discount cannot exceed 100")
        return self


class GuestUpdate(BaseModel):
    """Schema for partially updating a guest. All fields optional.

    Setting ``status`` to ``checked_out`` runs the checkout workflow.
    """

    name: str | None = Field(None, min_length=1, max_length=255)
    phone_number: str | None = Field(None, min_length=5, max_length=30)
    national_id: str | None = Field(None, min_length=1, max_length=50)
    checkin_at: NaiveUTCDatetime | None = None
    checkout_at: NaiveUTCDatetime | None = None
    checkin_time: str | None = Field(None, pattern=TIME_OF_DAY_PATTERN)
    purpose_of_visit: str | None = Field(None, max_length=50)
    room_id: uuid.UUID | None = None
    number_of_guests: int | None = Field(None, ge=1)
    status: str | None = Field(None, pattern="^(active|checked_out)$")

    @model_validator(mode="after")
    def check_dates(self) -> "GuestUpdate":
        """If both dates are provided, validate checkout_at >= checkin_at."""
        if self.checkin_at is not None and self.checkout_at is not None and self.checkout_at < self.checkin_at:
            raise ValueError("checkout_at must not be before checkin_at")
        return self


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class GuestResponse(BaseModel):
    """Guest record returned by the API."""

    id: uuid.UUID
    name: str
    phone_number: str
    national_id: str
    checkin_at: datetime
    checkin_time: str | None = None
    checkout_at: datetime
    purpose_of_visit: str | None = None
    room_id: uuid.UUID | None = None
    number_of_guests: int
    total_days: int
    base_amount: Decimal
    discount_amount: Decimal
    total_amount: Decimal
    status: str
    created_at: datetime
    room: RoomSummary | None = None

    model_config = ConfigDict(from_attributes=True)


class GuestDetailResponse(GuestResponse):
    """Guest with the full payment history."""

    payments: list[PaymentResponse] = []


class GuestListResponse(BaseModel):
    """Paginated list of guests."""

    items: list[GuestResponse]
    total: int
