from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol

from packages.shared.schemas.order_v1 import PaymentMethodV1, PaymentStatusV1


class PaymentAdapterError(Exception):
    """Base class for payment adapter errors."""


class PaymentValidationError(PaymentAdapterError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Payment details rejected: {reason}")
        self.reason = reason


class PaymentDeclinedError(PaymentAdapterError):
    def __init__(self, amount: Decimal, reason: str = "declined by issuer") -> None:
        super().__init__(f"Payment of {amount} was declined: {reason}")
        self.amount = amount
        self.reason = reason


@dataclass(frozen=True, slots=True)
class CardDetails:
    card_number: str
    cardholder_name: str
    expiry_date: str
    cvv: str


@dataclass(frozen=True, slots=True)
class ChargeResult:
    status: PaymentStatusV1
    transaction_id: str
    card_last_four: str | None = None
    card_brand: str | None = None


class PaymentAdapter(Protocol):
    provider: str

    def charge(
        self,
        *,
        amount: Decimal,
        currency: str,
        method: PaymentMethodV1,
        card: CardDetails | None = None,
    ) -> ChargeResult: ...
