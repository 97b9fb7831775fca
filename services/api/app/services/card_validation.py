"""Checks and display helpers for the mock card form."""

from __future__ import annotations

import re
from datetime import date

_NON_DIGITS = re.compile(r"\D")
_EXPIRY = re.compile(r"^(\d{2})/(\d{2})$")

_BRANDS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"^4"), "Visa"),
    (re.compile(r"^5[1-5]"), "Mastercard"),
    (re.compile(r"^3[47]"), "American Express"),
    (re.compile(r"^6(?:011|5)"), "Discover"),
    (re.compile(r"^(?:2131|1800|35)"), "JCB"),
)


def digits_only(value: str) -> str:
    return _NON_DIGITS.sub("", value)


def validate_luhn(card_number: str) -> bool:
    digits = digits_only(card_number)
    if not 13 <= len(digits) <= 19:
        return False

    total = 0
    for i, ch in enumerate(reversed(digits)):
        d = int(ch)
        if i % 2 == 1:
            d *= 2
            if d > 9:
                d -= 9
        total += d

    return total % 10 == 0


def get_card_brand(card_number: str) -> str:
    digits = digits_only(card_number)
    for pattern, brand in _BRANDS:
        if pattern.match(digits):
            return brand
    return "Unknown"


def validate_expiry_date(expiry: str, today: date | None = None) -> bool:
    """``MM/YY``; the card stays valid through the whole expiry month."""

    match = _EXPIRY.match(expiry)
    if match is None:
        return False

    month = int(match.group(1))
    year = 2000 + int(match.group(2))
    if not 1 <= month <= 12:
        return False

    today = today or date.today()
    return (year, month) >= (today.year, today.month)


def format_card_number(value: str) -> str:
    digits = digits_only(value)
    return " ".join(digits[i : i + 4] for i in range(0, len(digits), 4))


def format_expiry_date(value: str) -> str:
    digits = digits_only(value)
    if len(digits) >= 2:
        return f"{digits[:2]}/{digits[2:4]}"
    return digits
