"""Shared event schema (v1).

The backend stores an append-only event log. Clients poll these events to render an
order's status history.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class EntityTypeV1(str, Enum):
    ORDER = "Order"
    PAYMENT = "Payment"
    MENU_ITEM = "MenuItem"
    INVENTORY = "Inventory"


class EventTypeV1(str, Enum):
    ORDER_PLACED = "ORDER_PLACED"
    PAYMENT_COMPLETED = "PAYMENT_COMPLETED"
    ORDER_STATUS_CHANGED = "ORDER_STATUS_CHANGED"
    MENU_ITEM_CREATED = "MENU_ITEM_CREATED"
    MENU_ITEM_UPDATED = "MENU_ITEM_UPDATED"
    MENU_ITEM_DELETED = "MENU_ITEM_DELETED"
    STOCK_UPDATED = "STOCK_UPDATED"


class EventV1(BaseModel):
    id: str
    order_id: str | None = None

    entity_type: EntityTypeV1
    entity_id: str

    event_type: EventTypeV1
    payload: dict[str, Any] = Field(default_factory=dict)
    created_at: str
