"""Order creation and status changes.

The totals written here come from :func:`calculate_order_totals`, the same routine the
cart preview uses, so a placed order always matches what the customer was shown.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from uuid import uuid4

from packages.shared.schemas.events import EntityTypeV1, EventTypeV1
from packages.shared.schemas.order_v1 import (
    NEXT_ORDER_STATUS,
    OrderStatusV1,
    OrderTypeV1,
    PaymentMethodV1,
)
from services.api.app.db.models import EventLog, Order, OrderItem, Payment
from services.api.app.models.checkout import CheckoutRequest
from services.api.app.models.order import OrderItemOut, OrderListItem, OrderOut, PaymentOut
from services.api.app.services.cart_store import CartStore
from services.api.app.services.ids import generate_order_number
from services.api.app.services.payment_base import CardDetails, PaymentAdapter
from services.api.app.services.totals import calculate_order_totals, round2
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

CURRENCY = "EUR"

# Minutes until the order should reach the customer.
ESTIMATED_MINUTES: dict[OrderTypeV1, int] = {
    OrderTypeV1.DELIVERY: 45,
    OrderTypeV1.PICKUP: 30,
}


class EmptyCartError(Exception):
    def __init__(self, client_id: str) -> None:
        super().__init__("Your cart is empty")
        self.client_id = client_id


class OrderStatusTransitionError(Exception):
    def __init__(self, order_number: str, status: OrderStatusV1) -> None:
        super().__init__(f"Order {order_number} cannot advance from status {status.value}")
        self.order_number = order_number
        self.status = status


def log_event(
    db: Session,
    *,
    order_id: str | None,
    entity_type: EntityTypeV1,
    entity_id: str,
    event_type: EventTypeV1,
    event_payload: dict,
) -> None:
    db.add(
        EventLog(
            id=uuid4().hex,
            order_id=order_id,
            entity_type=entity_type.value,
            entity_id=entity_id,
            event_type=event_type.value,
            event_payload_json=event_payload,
        )
    )


def place_order(
    db: Session,
    cart: CartStore,
    payload: CheckoutRequest,
    payments: PaymentAdapter,
) -> Order:
    """Turn the cart into an order, a payment record and two log events, then clear the cart.

    Payment adapter errors propagate before anything is committed, leaving the cart intact.
    """

    lines = cart.items
    if not lines:
        raise EmptyCartError(payload.client_id)

    totals = calculate_order_totals(cart.priced_lines(), payload.tip, payload.order_type)

    card = None
    if payload.payment_method == PaymentMethodV1.CARD and payload.card is not None:
        card = CardDetails(
            card_number=payload.card.card_number,
            cardholder_name=payload.card.cardholder_name,
            expiry_date=payload.card.expiry_date,
            cvv=payload.card.cvv,
        )

    charge = payments.charge(
        amount=totals.total,
        currency=CURRENCY,
        method=payload.payment_method,
        card=card,
    )

    now = datetime.utcnow()
    order = Order(
        id=uuid4().hex,
        user_id=payload.user_id,
        session_id=cart.session_id,
        order_number=generate_order_number(),
        status=OrderStatusV1.PENDING.value,
        order_type=payload.order_type.value,
        subtotal=totals.subtotal,
        tax=totals.tax,
        delivery_fee=totals.delivery_fee,
        tip=totals.tip,
        total=totals.total,
        customer_name=payload.customer_name,
        customer_email=payload.customer_email,
        customer_phone=payload.customer_phone,
        delivery_address=(
            payload.delivery_address if payload.order_type == OrderTypeV1.DELIVERY else None
        ),
        special_instructions=payload.special_instructions or None,
        estimated_time=now + timedelta(minutes=ESTIMATED_MINUTES[payload.order_type]),
        created_at=now,
        updated_at=now,
    )

    for index, line in enumerate(lines):
        order.items.append(
            OrderItem(
                id=uuid4().hex,
                line_index=index,
                menu_item_id=line.menu_item.id,
                menu_item_name=line.menu_item.name,
                quantity=line.quantity,
                unit_price=line.menu_item.price,
                total_price=round2(line.line_total),
                special_instructions=line.special_instructions,
            )
        )

    payment = Payment(
        id=uuid4().hex,
        amount=totals.total,
        currency=CURRENCY,
        status=charge.status.value,
        payment_method=payload.payment_method.value,
        provider=payments.provider,
        card_last_four=charge.card_last_four,
        card_brand=charge.card_brand,
        transaction_id=charge.transaction_id,
        created_at=now,
    )
    order.payments.append(payment)
    db.add(order)

    log_event(
        db,
        order_id=order.id,
        entity_type=EntityTypeV1.ORDER,
        entity_id=order.id,
        event_type=EventTypeV1.ORDER_PLACED,
        event_payload={
            "order_number": order.order_number,
            "status": order.status,
            "total": str(totals.total),
        },
    )
    log_event(
        db,
        order_id=order.id,
        entity_type=EntityTypeV1.PAYMENT,
        entity_id=payment.id,
        event_type=EventTypeV1.PAYMENT_COMPLETED,
        event_payload={
            "amount": str(totals.total),
            "method": payment.payment_method,
            "transaction_id": payment.transaction_id,
        },
    )

    db.commit()
    cart.clear_cart()

    logger.info("Placed order %s total=%s %s", order.order_number, totals.total, CURRENCY)
    return order


def set_order_status(db: Session, order: Order, status: OrderStatusV1) -> Order:
    previous = order.status
    order.status = status.value
    order.updated_at = datetime.utcnow()

    log_event(
        db,
        order_id=order.id,
        entity_type=EntityTypeV1.ORDER,
        entity_id=order.id,
        event_type=EventTypeV1.ORDER_STATUS_CHANGED,
        event_payload={"from": previous, "to": status.value},
    )

    db.commit()
    logger.info("Order %s status %s -> %s", order.order_number, previous, status.value)
    return order


def advance_order_status(db: Session, order: Order) -> Order:
    current = OrderStatusV1(order.status)
    nxt = NEXT_ORDER_STATUS[current]
    if nxt is None:
        raise OrderStatusTransitionError(order.order_number, current)
    return set_order_status(db, order, nxt)


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def order_to_list_item(order: Order) -> OrderListItem:
    return OrderListItem(
        id=order.id,
        order_number=order.order_number,
        status=OrderStatusV1(order.status),
        order_type=OrderTypeV1(order.order_type),
        total=order.total,
        customer_name=order.customer_name,
        item_count=sum(item.quantity for item in order.items),
        created_at=order.created_at.isoformat(),
    )


def order_to_out(order: Order) -> OrderOut:
    payment = order.payments[0] if order.payments else None

    return OrderOut(
        id=order.id,
        order_number=order.order_number,
        user_id=order.user_id,
        session_id=order.session_id,
        status=OrderStatusV1(order.status),
        order_type=OrderTypeV1(order.order_type),
        subtotal=order.subtotal,
        tax=order.tax,
        delivery_fee=order.delivery_fee,
        tip=order.tip,
        total=order.total,
        customer_name=order.customer_name,
        customer_email=order.customer_email,
        customer_phone=order.customer_phone,
        delivery_address=order.delivery_address,
        special_instructions=order.special_instructions,
        estimated_time=_iso(order.estimated_time),
        created_at=order.created_at.isoformat(),
        updated_at=order.updated_at.isoformat(),
        items=[
            OrderItemOut(
                id=item.id,
                menu_item_id=item.menu_item_id,
                menu_item_name=item.menu_item_name,
                quantity=item.quantity,
                unit_price=item.unit_price,
                total_price=item.total_price,
                special_instructions=item.special_instructions,
            )
            for item in order.items
        ],
        payment=(
            PaymentOut(
                id=payment.id,
                amount=payment.amount,
                currency=payment.currency,
                status=payment.status,
                payment_method=payment.payment_method,
                provider=payment.provider,
                card_last_four=payment.card_last_four,
                card_brand=payment.card_brand,
                transaction_id=payment.transaction_id,
                created_at=payment.created_at.isoformat(),
            )
            if payment is not None
            else None
        ),
    )
