"""Order total calculation.

One routine serves the checkout preview and the persisted order so both agree to the
cent. The order of operations is fixed:

* tax is taken from the *unrounded* subtotal and then rounded;
* the grand total sums the already-rounded subtotal, tax, delivery fee and tip.

Rounding is ROUND_HALF_UP on ``Decimal``. Floats are converted through ``str`` so
``9.99`` is treated as exactly 9.99 rather than its binary approximation.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import NamedTuple, Union

from packages.shared.schemas.order_v1 import OrderTypeV1

TAX_RATE = Decimal("0.19")
DELIVERY_FEE = Decimal("3.99")

_CENT = Decimal("0.01")
_ZERO = Decimal("0")

Amount = Union[Decimal, int, float, str]


class PricedLine(NamedTuple):
    quantity: int
    unit_price: Amount


@dataclass(frozen=True, slots=True)
class OrderTotals:
    subtotal: Decimal
    tax: Decimal
    delivery_fee: Decimal
    tip: Decimal
    total: Decimal


def to_decimal(value: Amount) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round2(value: Amount) -> Decimal:
    return to_decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP)


def raw_subtotal(items: Iterable[tuple[int, Amount]]) -> Decimal:
    return sum((quantity * to_decimal(price) for quantity, price in items), _ZERO)


def calculate_order_totals(
    items: Iterable[tuple[int, Amount]],
    tip: Amount = 0,
    order_type: OrderTypeV1 | str = OrderTypeV1.DELIVERY,
) -> OrderTotals:
    """Compute subtotal, tax, delivery fee, tip and total for ``(quantity, unit_price)`` pairs.

    An empty item list is not special-cased: the delivery fee and tip still apply.
    """

    unrounded = raw_subtotal(items)

    subtotal = round2(unrounded)
    tax = round2(unrounded * TAX_RATE)
    delivery_fee = round2(DELIVERY_FEE if OrderTypeV1(order_type) == OrderTypeV1.DELIVERY else _ZERO)
    tip_amount = round2(tip)

    return OrderTotals(
        subtotal=subtotal,
        tax=tax,
        delivery_fee=delivery_fee,
        tip=tip_amount,
        total=round2(subtotal + tax + delivery_fee + tip_amount),
    )
