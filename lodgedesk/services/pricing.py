"""Stay billing: day count, base amount and discounts."""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

ONE_DAY = timedelta(days=1)
CENT = Decimal("0.01")


@dataclass(frozen=True)
class StayCharges:
    total_days: int
    base_amount: Decimal
    discount_amount: Decimal
    total_amount: Decimal


def compute_total_days(checkin: datetime, checkout: datetime) -> int:
    """Whole days billed for a stay; any stay, even a same-instant one, bills at least one."""
    return max(1, math.ceil((checkout - checkin) / ONE_DAY))


def compute_discount(
    base_amount: Decimal,
    discount_type: str | None,
    discount_value: Decimal | None,
) -> Decimal:
    """Percentage discounts are rounded half-up to the cent; flat ones are capped at the base."""
    if not discount_type or not discount_value:
        return Decimal("0.00")
    if discount_type == "percentage":
        discount = base_amount * Decimal(discount_value) / Decimal(100)
    elif discount_type == "flat":
        discount = min(Decimal(discount_value), base_amount)
    else:
        raise ValueError(f"Unknown discount type: {discount_type!r}")
    return discount.quantize(CENT, rounding=ROUND_HALF_UP)


def compute_charges(
    base_price: Decimal,
    checkin: datetime,
    checkout: datetime,
    discount_type: str | None = None,
    discount_value: Decimal | None = None,
) -> StayCharges:
    total_days = compute_total_days(checkin, checkout)
    base_amount = (Decimal(base_price) * total_days).quantize(CENT, rounding=ROUND_HALF_UP)
    discount_amount = compute_discount(base_amount, discount_type, discount_value)
    return StayCharges(
        total_days=total_days,
        base_amount=base_amount,
        discount_amount=discount_amount,
        total_amount=base_amount - discount_amount,
    )
