"""Shared API dependencies: single import point for all routers.

Re-exports the database session, authentication and notification
dependencies so that router modules can import everything they need from
one place::

    from lodgedesk.api.deps import get_db, get_current_active_user, get_dispatcher
"""

from lodgedesk.auth.dependencies import get_current_active_user, get_current_user
from lodgedesk.database import get_db
from lodgedesk.notifications.dependencies import get_dispatcher

__all__ = [
    "get_db",
    "get_current_user",
    "get_current_active_user",
    "get_dispatcher",
]
