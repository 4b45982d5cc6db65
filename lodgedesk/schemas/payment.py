"""Pydantic v2 request/response schemas for payment endpoints."""

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class PaymentCreate(BaseModel):
    """Additional or corrective payment for an existing guest."""

    guest_id: uuid.UUID
    amount: Decimal = Field(..., ge=0)
    payment_method: str = Field("cash", pattern="^(cash|qr)$")
    status: str = Field("pending", pattern="^(pending|paid)$")


class PaymentUpdate(BaseModel):
    """Schema for partially updating a payment. All fields optional."""

    amount: Decimal | None = Field(None, ge=0)
    payment_method: str | None = Field(None, pattern="^(cash|qr)$")
    status: str | None = Field(None, pattern="^(pending|paid)$")


class PaymentPayRequest(BaseModel):
    """Mark a payment as received."""

    payment_method: str = Field(..., pattern="^(cash|qr)$")


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class PaymentResponse(BaseModel):
    """Payment record returned by the API."""

    id: uuid.UUID
    guest_id: uuid.UUID
    amount: Decimal
    payment_method: str
    status: str
    created_at: datetime
    paid_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class PaymentGuestSummary(BaseModel):
    name: str
    phone_number: str


class PaymentRoomSummary(BaseModel):
    room_number: str


class PaymentWithGuestResponse(PaymentResponse):
    """Payment enriched with who owes it and for which room."""

    guest: PaymentGuestSummary | None = None
    room: PaymentRoomSummary | None = None


class PaymentListResponse(BaseModel):
    """Paginated list of payments."""

    items: list[PaymentWithGuestResponse]
    total: int
