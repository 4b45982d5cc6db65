"""SQLAlchemy models for LodgeDesk.

All models are imported here so that Alembic's autogenerate can discover
them via Base.metadata. If you add a new model, import it in this file.
"""

from lodgedesk.models.guest import Guest
from lodgedesk.models.lodge_settings import LodgeSettings
from lodgedesk.models.notification_log import NotificationLog
from lodgedesk.models.payment import Payment
from lodgedesk.models.room import Room
from lodgedesk.models.user import User

__all__ = [
    "Guest",
    "LodgeSettings",
    "NotificationLog",
    "Payment",
    "Room",
    "User",
]
