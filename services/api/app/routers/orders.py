from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from packages.shared.schemas.events import EntityTypeV1, EventTypeV1, EventV1
from services.api.app.db.deps import get_db
from services.api.app.db.models import EventLog, Order
from services.api.app.models.order import OrderListItem, OrderOut
from services.api.app.services.orders import order_to_list_item, order_to_out
from sqlalchemy.orm import Session

router = APIRouter()


@router.get("/v1/orders", response_model=list[OrderListItem])
def list_orders(
    user_id: str | None = None,
    customer_email: str | None = None,
    db: Session = Depends(get_db),
) -> list[OrderListItem]:
    if not user_id and not customer_email:
        raise HTTPException(status_code=422, detail="user_id or customer_email is required")

    query = db.query(Order)
    if user_id:
        query = query.filter(Order.user_id == user_id)
    if customer_email:
        query = query.filter(Order.customer_email == customer_email)

    rows = query.order_by(Order.created_at.desc()).limit(200).all()
    return [order_to_list_item(order) for order in rows]


@router.get("/v1/orders/{order_id}", response_model=OrderOut)
def get_order(order_id: str, db: Session = Depends(get_db)) -> OrderOut:
    order = db.get(Order, order_id)
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return order_to_out(order)


@router.get("/v1/orders/{order_id}/events", response_model=list[EventV1])
def get_order_events(order_id: str, db: Session = Depends(get_db)) -> list[EventV1]:
    if db.get(Order, order_id) is None:
        raise HTTPException(status_code=404, detail="Order not found")

    rows = (
        db.query(EventLog)
        .filter(EventLog.order_id == order_id)
        .order_by(EventLog.created_at.asc())
        .all()
    )

    return [
        EventV1(
            id=e.id,
            order_id=e.order_id,
            entity_type=EntityTypeV1(e.entity_type),
            entity_id=e.entity_id,
            event_type=EventTypeV1(e.event_type),
            payload=e.event_payload_json,
            created_at=e.created_at.isoformat(),
        )
        for e in rows
    ]
