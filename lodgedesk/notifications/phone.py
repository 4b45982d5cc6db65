"""Phone number normalization to E.164."""

import re

_NON_DIGITS = re.compile(r"\D")


def normalize_phone_number(phone: str, country_code: str = "91") -> str:
    """Return ``phone`` in ``+<country><number>`` form where it can be inferred.

    Ten-digit local numbers get ``country_code`` prepended and numbers that
    already carry the country code just gain the ``+``. Anything else is
    returned unchanged.
    """
    digits = _NON_DIGITS.sub("", phone)
    if len(digits) == 10:
        return f"+{country_code}{digits}"
    if len(digits) == 10 + len(country_code) and digits.startswith(country_code):
        return f"+{digits}"
    return phone
