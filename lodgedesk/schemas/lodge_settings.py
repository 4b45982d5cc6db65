"""Pydantic v2 request/response schemas for lodge settings."""

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from lodgedesk.schemas.common import TIME_OF_DAY_PATTERN


class LodgeSettingsCreate(BaseModel):
    """Onboarding payload."""

    name: str = Field(..., min_length=1, max_length=255)
    address: str = Field(..., min_length=1)
    contact_number: str = Field(..., min_length=5, max_length=30)
    tax_rate: Decimal = Field(Decimal("18.00"), ge=0, le=100)
    discount_rate: Decimal = Field(Decimal("0.00"), ge=0, le=100)
    currency: str = Field("INR", min_length=3, max_length=10)
    sms_template: str | None = None
    default_checkin_time: str = Field("12:00", pattern=TIME_OF_DAY_PATTERN)
    default_checkout_time: str = Field("11:00", pattern=TIME_OF_DAY_PATTERN)
    is_setup_complete: bool = False


class LodgeSettingsUpdate(BaseModel):
    """Schema for partially updating settings. All fields optional."""

    name: str | None = Field(None, min_length=1, max_length=255)
    address: str | None = Field(None, min_length=1)
    contact_number: str | None = Field(None, min_length=5, max_length=30)
    tax_rate: Decimal | None = Field(None, ge=0, le=100)
    discount_rate: Decimal | None = Field(None, ge=0, le=100)
    currency: str | None = Field(None, min_length=3, max_length=10)
    sms_template: str | None = None
    default_checkin_time: str | None = Field(None, pattern=TIME_OF_DAY_PATTERN)
    default_checkout_time: str | None = Field(None, pattern=TIME_OF_DAY_PATTERN)
    is_setup_complete: bool | None = None


class LodgeSettingsResponse(BaseModel):
    id: uuid.UUID
    name: str
    address: str
    contact_number: str
    tax_rate: Decimal
    discount_rate: Decimal
    currency: str
    sms_template: str | None = None
    default_checkin_time: str
    default_checkout_time: str
    is_setup_complete: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
