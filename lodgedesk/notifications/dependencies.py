"""FastAPI dependency exposing the application's notification dispatcher."""

from fastapi import Request

from lodgedesk.notifications.dispatcher import NotificationDispatcher


def get_dispatcher(request: Request) -> NotificationDispatcher:
    """Return the dispatcher created in the application lifespan."""
    return request.app.state.dispatcher
