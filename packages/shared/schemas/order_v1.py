"""Shared order enums (v1).

Status names match what the storefront and the back office render.
"""

from __future__ import annotations

from enum import Enum


class OrderTypeV1(str, Enum):
    DELIVERY = "delivery"
    PICKUP = "pickup"


class OrderStatusV1(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentMethodV1(str, Enum):
    CARD = "card"
    CASH = "cash"


class PaymentStatusV1(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


# Happy-path progression used by the back office "advance" action.
NEXT_ORDER_STATUS: dict[OrderStatusV1, OrderStatusV1 | None] = {
    OrderStatusV1.PENDING: OrderStatusV1.CONFIRMED,
    OrderStatusV1.CONFIRMED: OrderStatusV1.PREPARING,
    OrderStatusV1.PREPARING: OrderStatusV1.READY,
    OrderStatusV1.READY: OrderStatusV1.OUT_FOR_DELIVERY,
    OrderStatusV1.OUT_FOR_DELIVERY: OrderStatusV1.DELIVERED,
    OrderStatusV1.DELIVERED: None,
    OrderStatusV1.CANCELLED: None,
}
