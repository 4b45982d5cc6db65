"""Pydantic v2 schemas for analytics endpoints."""

from decimal import Decimal

from pydantic import BaseModel


class DashboardResponse(BaseModel):
    """Front-desk summary numbers."""

    available_rooms: int
    occupied_rooms: int
    maintenance_rooms: int
    total_rooms: int
    active_guests: int
    pending_payments: int
    today_revenue: Decimal
