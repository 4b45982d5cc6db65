"""SMS notifications: templates, delivery channels and the dispatcher."""

from lodgedesk.notifications.dispatcher import (
    NotificationDispatcher,
    NotificationResult,
    create_dispatcher,
)
from lodgedesk.notifications.senders import SMSMessage, SMSResult, SMSSender
from lodgedesk.notifications.templates import TEMPLATES, SMSTemplate, get_template, render_template

__all__ = [
    "NotificationDispatcher",
    "NotificationResult",
    "create_dispatcher",
    "SMSMessage",
    "SMSResult",
    "SMSSender",
    "TEMPLATES",
    "SMSTemplate",
    "get_template",
    "render_template",
]
