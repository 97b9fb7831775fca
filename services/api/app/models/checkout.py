from __future__ import annotations

from decimal import Decimal

from packages.shared.schemas.order_v1 import OrderTypeV1, PaymentMethodV1
from pydantic import BaseModel, Field, field_validator, model_validator
from services.api.app.services.card_validation import (
    digits_only,
    validate_expiry_date,
    validate_luhn,
)


class OrderTotalsOut(BaseModel):
    subtotal: Decimal
    tax: Decimal
    delivery_fee: Decimal
    tip: Decimal
    total: Decimal


class CardPaymentIn(BaseModel):
    card_number: str
    cardholder_name: str = Field(..., min_length=2)
    expiry_date: str
    cvv: str = Field(..., pattern=r"^\d{3,4}$")

    @field_validator("card_number")
    @classmethod
    def _luhn(cls, value: str) -> str:
        if not validate_luhn(value):
            raise ValueError("Invalid card number")
        return digits_only(value)

    @field_validator("expiry_date")
    @classmethod
    def _expiry(cls, value: str) -> str:
        if not validate_expiry_date(value):
            raise ValueError("Invalid expiry date")
        return value


class CheckoutRequest(BaseModel):
    client_id: str
    user_id: str | None = None

    customer_name: str = Field(..., min_length=2, max_length=100)
    customer_email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    customer_phone: str = Field(..., pattern=r"^\+?[\d\s-]{10,}$")

    order_type: OrderTypeV1 = OrderTypeV1.DELIVERY
    delivery_address: str | None = None
    special_instructions: str | None = Field(default=None, max_length=500)
    tip: Decimal = Field(default=Decimal("0"), ge=0)

    payment_method: PaymentMethodV1 = PaymentMethodV1.CARD
    card: CardPaymentIn | None = None

    @model_validator(mode="after")
    def _card_required(self) -> CheckoutRequest:
        if self.payment_method == PaymentMethodV1.CARD and self.card is None:
            raise ValueError("Card details are required for card payments")
        return self
