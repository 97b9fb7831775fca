from decimal import Decimal

import pytest
from packages.shared.schemas.order_v1 import PaymentMethodV1, PaymentStatusV1
from services.api.app.services.payment_base import CardDetails, PaymentValidationError
from services.api.app.services.payment_factory import get_payment_adapter
from services.api.app.services.payment_mock import MockPaymentAdapter


def test_get_payment_adapter_defaults_to_mock(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TAVOLA_PAYMENT_ADAPTER", raising=False)
    adapter = get_payment_adapter()
    assert adapter.provider == "MOCK"


def test_get_payment_adapter_rejects_unknown(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TAVOLA_PAYMENT_ADAPTER", "nope")
    with pytest.raises(ValueError, match="Unknown TAVOLA_PAYMENT_ADAPTER"):
        get_payment_adapter()


def test_mock_card_charge_records_brand_and_last_four() -> None:
    result = MockPaymentAdapter().charge(
        amount=Decimal("27.79"),
        currency="EUR",
        method=PaymentMethodV1.CARD,
        card=CardDetails(
            card_number="5555 5555 5555 4444",
            cardholder_name="Ada Lovelace",
            expiry_date="12/99",
            cvv="123",
        ),
    )

    assert result.status == PaymentStatusV1.COMPLETED
    assert result.card_last_four == "4444"
    assert result.card_brand == "Mastercard"
    assert result.transaction_id.startswith("TXN_")


def test_mock_cash_charge_has_no_card_fields() -> None:
    result = MockPaymentAdapter().charge(
        amount=Decimal("10.00"), currency="EUR", method=PaymentMethodV1.CASH
    )

    assert result.status == PaymentStatusV1.COMPLETED
    assert result.card_last_four is None
    assert result.card_brand is None


def test_mock_card_charge_requires_card() -> None:
    with pytest.raises(PaymentValidationError, match="card details are required"):
        MockPaymentAdapter().charge(
            amount=Decimal("10.00"), currency="EUR", method=PaymentMethodV1.CARD
        )
