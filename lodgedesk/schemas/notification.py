"""Pydantic v2 schemas for notification endpoints."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class TemplateResponse(BaseModel):
    id: str
    name: str
    category: str
    version: int
    template: str
    variables: list[str]


class SendTemplateRequest(BaseModel):
    template_id: str = Field(..., min_length=1)
    phone_number: str = Field(..., min_length=5, max_length=30)
    variables: dict[str, str]
    guest_id: uuid.UUID | None = None


class SendMessageRequest(BaseModel):
    """Free-text SMS, e.g. a bill typed by staff."""

    phone_number: str = Field(..., min_length=5, max_length=30)
    message: str = Field(..., min_length=1, max_length=1600)
    guest_id: uuid.UUID | None = None


class NotificationResultResponse(BaseModel):
    success: bool
    message_id: str | None = None
    error: str | None = None
    log_id: uuid.UUID | None = None


class NotificationLogResponse(BaseModel):
    id: uuid.UUID
    guest_id: uuid.UUID | None = None
    phone_number: str
    message: str
    template_id: str | None = None
    status: str
    provider_message_id: str | None = None
    error: str | None = None
    sent_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NotificationStatsResponse(BaseModel):
    days: int
    total_sent: int
    total_failed: int
    success_rate: float
