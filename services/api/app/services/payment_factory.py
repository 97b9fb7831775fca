from __future__ import annotations

import os

from services.api.app.services.payment_base import PaymentAdapter
from services.api.app.services.payment_mock import MockPaymentAdapter


def get_payment_adapter() -> PaymentAdapter:
    """Select a payment adapter based on env vars.

    Only the mock exists today; the switch keeps checkout wiring identical once a real
    processor is added.
    """

    mode = os.getenv("TAVOLA_PAYMENT_ADAPTER", "mock").strip().lower()

    if mode == "mock":
        return MockPaymentAdapter()

    raise ValueError(f"Unknown TAVOLA_PAYMENT_ADAPTER={mode!r}. Expected mock.")
