"""Notifications API router: templates, manual sends, history and stats."""

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from lodgedesk.api.deps import get_current_active_user, get_db, get_dispatcher
from lodgedesk.models.user import User
from lodgedesk.notifications.dispatcher import NotificationDispatcher, NotificationResult
from lodgedesk.notifications.templates import TEMPLATES
from lodgedesk.schemas.notification import (
    NotificationLogResponse,
    NotificationResultResponse,
    NotificationStatsResponse,
    SendMessageRequest,
    SendTemplateRequest,
    TemplateResponse,
)
from lodgedesk.services import notification_service

router = APIRouter(prefix="/api/v1/notifications", tags=["notifications"])


@router.get("/templates", response_model=list[TemplateResponse], summary="List SMS templates")
async def list_templates(current_user: User = Depends(get_current_active_user)) -> list[dict]:
    return [
        {
            "id": t.id,
            "name": t.name,
            "category": t.category,
            "version": t.version,
            "template": t.template,
            "variables": list(t.variables),
        }
        for t in TEMPLATES.values()
        if t.active
    ]


@router.post("/send-template", response_model=NotificationResultResponse, summary="Send a templated SMS")
async def send_template(
    body: SendTemplateRequest,
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
    current_user: User = Depends(get_current_active_user),
) -> NotificationResult:
    """Render and send a template now.

    Raises 404 for an unknown template, 400 for missing variables and 429
    when the phone number is throttled. A channel failure is reported in the
    body with ``success: false``.
    """
    return await dispatcher.send(body.template_id, body.phone_number, body.variables, body.guest_id)


@router.post("/send-message", response_model=NotificationResultResponse, summary="Send a free-text SMS")
async def send_message(
    body: SendMessageRequest,
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
    current_user: User = Depends(get_current_active_user),
) -> NotificationResult:
    return await dispatcher.send_message(body.phone_number, body.message, body.guest_id)


@router.get(
    "/history/{guest_id}",
    response_model=list[NotificationLogResponse],
    summary="Messages sent to a guest",
)
async def guest_history(
    guest_id: uuid.UUID,
    limit: int = Query(50, ge=1, le=200),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list:
    return await notification_service.get_guest_history(db, guest_id, limit=limit)


@router.get("/stats", response_model=NotificationStatsResponse, summary="Delivery statistics")
async def stats(
    days: int = Query(7, ge=1, le=365, description="Look-back window in days"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> notification_service.NotificationStats:
    return await notification_service.get_stats(db, days=days)
