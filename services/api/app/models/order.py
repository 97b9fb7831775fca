from __future__ import annotations

from decimal import Decimal

from packages.shared.schemas.order_v1 import OrderStatusV1, OrderTypeV1
from pydantic import BaseModel


class OrderItemOut(BaseModel):
    id: str
    menu_item_id: str
    menu_item_name: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal
    special_instructions: str | None = None


class PaymentOut(BaseModel):
    id: str
    amount: Decimal
    currency: str
    status: str
    payment_method: str
    provider: str
    card_last_four: str | None = None
    card_brand: str | None = None
    transaction_id: str | None = None
    created_at: str


class OrderOut(BaseModel):
    id: str
    order_number: str
    user_id: str | None = None
    session_id: str | None = None

    status: OrderStatusV1
    order_type: OrderTypeV1

    subtotal: Decimal
    tax: Decimal
    delivery_fee: Decimal
    tip: Decimal
    total: Decimal

    customer_name: str
    customer_email: str
    customer_phone: str
    delivery_address: str | None = None
    special_instructions: str | None = None
    estimated_time: str | None = None

    created_at: str
    updated_at: str

    items: list[OrderItemOut]
    payment: PaymentOut | None = None


class OrderListItem(BaseModel):
    id: str
    order_number: str
    status: OrderStatusV1
    order_type: OrderTypeV1
    total: Decimal
    customer_name: str
    item_count: int
    created_at: str


class OrderStatusUpdate(BaseModel):
    status: OrderStatusV1
