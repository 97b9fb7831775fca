"""Back-office endpoints.

Access control is delegated to the gateway in front of the service; nothing here checks
roles.
"""

from __future__ import annotations

from datetime import datetime
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException
from packages.shared.schemas.events import EntityTypeV1, EventTypeV1
from packages.shared.schemas.order_v1 import OrderStatusV1
from services.api.app.db.deps import get_db
from services.api.app.db.models import Inventory, MenuItem, Order
from services.api.app.models.admin import DashboardStats, InventoryOut, StockUpdate
from services.api.app.models.menu import AvailabilityUpdate, MenuItemForm, MenuItemOut
from services.api.app.models.order import OrderListItem, OrderOut, OrderStatusUpdate
from services.api.app.services.dashboard import build_dashboard
from services.api.app.services.menu_catalog import to_schema
from services.api.app.services.orders import (
    OrderStatusTransitionError,
    advance_order_status,
    log_event,
    order_to_list_item,
    order_to_out,
    set_order_status,
)
from sqlalchemy import or_
from sqlalchemy.orm import Session

router = APIRouter(prefix="/v1/admin", tags=["admin"])

DEFAULT_LOW_STOCK_THRESHOLD = 10


def _get_menu_item(db: Session, menu_item_id: str) -> MenuItem:
    row = db.get(MenuItem, menu_item_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Menu item not found")
    return row


def _get_order(db: Session, order_id: str) -> Order:
    order = db.get(Order, order_id)
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


def _inventory_out(row: Inventory) -> InventoryOut:
    return InventoryOut(
        id=row.id,
        menu_item_id=row.menu_item_id,
        menu_item_name=row.menu_item.name,
        quantity=row.quantity,
        low_stock_threshold=row.low_stock_threshold,
        is_low_stock=row.quantity <= row.low_stock_threshold,
        last_restocked=row.last_restocked.isoformat() if row.last_restocked else None,
        updated_at=row.updated_at.isoformat(),
    )


# Menu


@router.get("/menu", response_model=list[MenuItemOut])
def admin_list_menu(db: Session = Depends(get_db)) -> list[MenuItemOut]:
    rows = db.query(MenuItem).order_by(MenuItem.category, MenuItem.name).all()
    return [MenuItemOut(**to_schema(row).model_dump()) for row in rows]


@router.post("/menu", response_model=MenuItemOut, status_code=201)
def create_menu_item(payload: MenuItemForm, db: Session = Depends(get_db)) -> MenuItemOut:
    values = payload.model_dump()
    values["category"] = payload.category.value
    values["image_url"] = payload.image_url or None

    row = MenuItem(id=uuid4().hex, **values)
    db.add(row)
    log_event(
        db,
        order_id=None,
        entity_type=EntityTypeV1.MENU_ITEM,
        entity_id=row.id,
        event_type=EventTypeV1.MENU_ITEM_CREATED,
        event_payload={"name": row.name, "price": str(row.price)},
    )
    db.commit()
    return MenuItemOut(**to_schema(row).model_dump())


@router.put("/menu/{menu_item_id}", response_model=MenuItemOut)
def update_menu_item(
    menu_item_id: str, payload: MenuItemForm, db: Session = Depends(get_db)
) -> MenuItemOut:
    row = _get_menu_item(db, menu_item_id)

    values = payload.model_dump()
    values["category"] = payload.category.value
    values["image_url"] = payload.image_url or None
    for field, value in values.items():
        setattr(row, field, value)
    row.updated_at = datetime.utcnow()

    log_event(
        db,
        order_id=None,
        entity_type=EntityTypeV1.MENU_ITEM,
        entity_id=row.id,
        event_type=EventTypeV1.MENU_ITEM_UPDATED,
        event_payload={"fields": sorted(values)},
    )
    db.commit()
    return MenuItemOut(**to_schema(row).model_dump())


@router.patch("/menu/{menu_item_id}/availability", response_model=MenuItemOut)
def set_menu_item_availability(
    menu_item_id: str, payload: AvailabilityUpdate, db: Session = Depends(get_db)
) -> MenuItemOut:
    row = _get_menu_item(db, menu_item_id)
    row.is_available = payload.is_available
    row.updated_at = datetime.utcnow()

    log_event(
        db,
        order_id=None,
        entity_type=EntityTypeV1.MENU_ITEM,
        entity_id=row.id,
        event_type=EventTypeV1.MENU_ITEM_UPDATED,
        event_payload={"is_available": payload.is_available},
    )
    db.commit()
    return MenuItemOut(**to_schema(row).model_dump())


@router.delete("/menu/{menu_item_id}", status_code=204)
def delete_menu_item(menu_item_id: str, db: Session = Depends(get_db)) -> None:
    row = _get_menu_item(db, menu_item_id)

    db.query(Inventory).filter(Inventory.menu_item_id == row.id).delete()
    db.delete(row)
    log_event(
        db,
        order_id=None,
        entity_type=EntityTypeV1.MENU_ITEM,
        entity_id=menu_item_id,
        event_type=EventTypeV1.MENU_ITEM_DELETED,
        event_payload={"name": row.name},
    )
    db.commit()


# Inventory


@router.get("/inventory", response_model=list[InventoryOut])
def list_inventory(low_stock_only: bool = False, db: Session = Depends(get_db)) -> list[InventoryOut]:
    rows = db.query(Inventory).join(MenuItem).order_by(MenuItem.name).all()
    out = [_inventory_out(row) for row in rows]
    if low_stock_only:
        out = [row for row in out if row.is_low_stock]
    return out


@router.put("/inventory/{menu_item_id}", response_model=InventoryOut)
def set_stock(
    menu_item_id: str, payload: StockUpdate, db: Session = Depends(get_db)
) -> InventoryOut:
    _get_menu_item(db, menu_item_id)

    now = datetime.utcnow()
    row = db.query(Inventory).filter(Inventory.menu_item_id == menu_item_id).first()
    if row is None:
        row = Inventory(
            id=uuid4().hex,
            menu_item_id=menu_item_id,
            quantity=0,
            low_stock_threshold=DEFAULT_LOW_STOCK_THRESHOLD,
        )
        db.add(row)

    previous = row.quantity
    row.quantity = payload.quantity
    if payload.low_stock_threshold is not None:
        row.low_stock_threshold = payload.low_stock_threshold
    if payload.quantity > previous:
        row.last_restocked = now
    row.updated_at = now

    log_event(
        db,
        order_id=None,
        entity_type=EntityTypeV1.INVENTORY,
        entity_id=row.id,
        event_type=EventTypeV1.STOCK_UPDATED,
        event_payload={"menu_item_id": menu_item_id, "from": previous, "to": payload.quantity},
    )
    db.commit()
    return _inventory_out(row)


# Orders


@router.get("/orders", response_model=list[OrderListItem])
def admin_list_orders(
    status: OrderStatusV1 | None = None,
    search: str | None = None,
    db: Session = Depends(get_db),
) -> list[OrderListItem]:
    query = db.query(Order)
    if status is not None:
        query = query.filter(Order.status == status.value)
    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(
            or_(
                Order.order_number.ilike(pattern),
                Order.customer_name.ilike(pattern),
                Order.customer_email.ilike(pattern),
            )
        )

    rows = query.order_by(Order.created_at.desc()).limit(200).all()
    return [order_to_list_item(order) for order in rows]


@router.post("/orders/{order_id}/status", response_model=OrderOut)
def update_order_status(
    order_id: str, payload: OrderStatusUpdate, db: Session = Depends(get_db)
) -> OrderOut:
    order = _get_order(db, order_id)
    return order_to_out(set_order_status(db, order, payload.status))


@router.post("/orders/{order_id}/advance", response_model=OrderOut)
def advance_order(order_id: str, db: Session = Depends(get_db)) -> OrderOut:
    order = _get_order(db, order_id)
    try:
        order = advance_order_status(db, order)
    except OrderStatusTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    return order_to_out(order)


# Dashboard


@router.get("/dashboard", response_model=DashboardStats)
def dashboard(db: Session = Depends(get_db)) -> DashboardStats:
    return build_dashboard(db)
