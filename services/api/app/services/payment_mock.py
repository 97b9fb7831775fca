from __future__ import annotations

from decimal import Decimal

from packages.shared.schemas.order_v1 import PaymentMethodV1, PaymentStatusV1
from services.api.app.services.card_validation import digits_only, get_card_brand, validate_luhn
from services.api.app.services.ids import generate_transaction_id
from services.api.app.services.payment_base import CardDetails, ChargeResult, PaymentValidationError


class MockPaymentAdapter:
    """Accepts any well-formed card and every cash order. No money moves."""

    provider = "MOCK"

    def charge(
        self,
        *,
        amount: Decimal,
        currency: str,
        method: PaymentMethodV1,
        card: CardDetails | None = None,
    ) -> ChargeResult:
        del amount, currency

        if method == PaymentMethodV1.CASH:
            return ChargeResult(
                status=PaymentStatusV1.COMPLETED,
                transaction_id=generate_transaction_id(),
            )

        if card is None:
            raise PaymentValidationError("card details are required for card payments")
        if not validate_luhn(card.card_number):
            raise PaymentValidationError("invalid card number")

        digits = digits_only(card.card_number)
        return ChargeResult(
            status=PaymentStatusV1.COMPLETED,
            transaction_id=generate_transaction_id(),
            card_last_four=digits[-4:],
            card_brand=get_card_brand(digits),
        )
