from __future__ import annotations

import time
from uuid import uuid4

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _base36(value: int) -> str:
    if value == 0:
        return "0"
    digits: list[str] = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def _now_ms() -> int:
    return int(time.time() * 1000)


def generate_session_id() -> str:
    """Opaque token tying a guest's cart to the order it eventually becomes."""
    return f"sess_{_base36(_now_ms())}_{uuid4().hex[:13]}"


def generate_line_id() -> str:
    return f"cart_{_now_ms()}_{uuid4().hex[:7]}"


def generate_order_number() -> str:
    return f"ORD-{_base36(_now_ms()).upper()}-{uuid4().hex[:4].upper()}"


def generate_transaction_id() -> str:
    return f"TXN_{_now_ms()}_{uuid4().hex[:7].upper()}"
