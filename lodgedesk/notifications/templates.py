"""SMS template registry with ``[VARIABLE]`` placeholders."""

import re
from dataclasses import dataclass

from lodgedesk.errors import MissingVariables, TemplateNotFound

_PLACEHOLDER = re.compile(r"\[([A-Z_]+)\]")


@dataclass(frozen=True)
class SMSTemplate:
    id: str
    name: str
    category: str  # booking, payment, checkout, reminder
    version: int
    template: str
    variables: tuple[str, ...]
    active: bool = True


TEMPLATES: dict[str, SMSTemplate] = {
    t.id: t
    for t in (
        SMSTemplate(
            id="welcome-booking",
            name="Welcome & Booking Confirmation",
            category="booking",
            version=1,
            template=(
                "Welcome to [LODGE_NAME]! Your booking is confirmed. Room: [ROOM_NUMBER], "
                "Check-in: [CHECKIN_DATE] at [CHECKIN_TIME]. Amount: Rs.[AMOUNT]. Thank you!"
            ),
            variables=("LODGE_NAME", "ROOM_NUMBER", "CHECKIN_DATE", "CHECKIN_TIME", "AMOUNT"),
        ),
        SMSTemplate(
            id="payment-confirmation",
            name="Payment Received",
            category="payment",
            version=1,
            template=(
                "Payment received! Rs.[AMOUNT] paid via [PAYMENT_METHOD] for room [ROOM_NUMBER]. "
                "Receipt ID: [RECEIPT_ID]. Thank you for staying with [LODGE_NAME]!"
            ),
            variables=("AMOUNT", "PAYMENT_METHOD", "ROOM_NUMBER", "RECEIPT_ID", "LODGE_NAME"),
        ),
        SMSTemplate(
            id="checkout-bill",
            name="Checkout & Final Bill",
            category="checkout",
            version=1,
            template=(
                "Thank you for staying at [LODGE_NAME]! Your final bill: Rs.[TOTAL_AMOUNT] ([DAYS] days). "
                "Please settle any pending dues. Safe travels!"
            ),
            variables=("LODGE_NAME", "TOTAL_AMOUNT", "DAYS"),
        ),
        SMSTemplate(
            id="payment-reminder",
            name="Payment Reminder",
            category="reminder",
            version=1,
            template=(
                "Gentle reminder: Payment of Rs.[AMOUNT] is pending for your stay at [LODGE_NAME], "
                "Room [ROOM_NUMBER]. Please settle at your earliest convenience."
            ),
            variables=("AMOUNT", "LODGE_NAME", "ROOM_NUMBER"),
        ),
    )
}


def get_template(template_id: str) -> SMSTemplate:
    template = TEMPLATES.get(template_id)
    if template is None or not template.active:
        raise TemplateNotFound(f"Template {template_id} not found or inactive")
    return template


def render_template(template: SMSTemplate, variables: dict[str, str]) -> str:
    """Substitute every declared placeholder.

    Raises ``MissingVariables`` when a declared variable is absent or empty.
    Unknown placeholders in the text are left untouched.
    """
    missing = [name for name in template.variables if not variables.get(name)]
    if missing:
        raise MissingVariables(missing)

    return _PLACEHOLDER.sub(
        lambda match: str(variables.get(match.group(1), match.group(0))),
        template.template,
    )
