"""Shared field types for request schemas."""

from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator


def to_naive_utc(value: datetime) -> datetime:
    """Convert aware datetimes to naive UTC; naive input is taken as UTC already."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


NaiveUTCDatetime = Annotated[datetime, AfterValidator(to_naive_utc)]

# 24h wall-clock time, e.g. "12:00"
TIME_OF_DAY_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"
