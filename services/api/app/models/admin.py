from __future__ import annotations

from decimal import Decimal

from packages.shared.schemas.order_v1 import OrderStatusV1
from pydantic import BaseModel, Field
from services.api.app.models.order import OrderListItem


class InventoryOut(BaseModel):
    id: str
    menu_item_id: str
    menu_item_name: str
    quantity: int
    low_stock_threshold: int
    is_low_stock: bool
    last_restocked: str | None = None
    updated_at: str


class StockUpdate(BaseModel):
    quantity: int = Field(..., ge=0)
    low_stock_threshold: int | None = Field(default=None, ge=0)


class StatusCount(BaseModel):
    status: OrderStatusV1
    count: int


class TopMenuItem(BaseModel):
    menu_item_id: str
    menu_item_name: str
    total_ordered: int
    revenue: Decimal


class DashboardStats(BaseModel):
    total_orders: int
    total_revenue: Decimal
    average_order_value: Decimal
    pending_orders: int
    today_orders: int
    today_revenue: Decimal

    orders_by_status: list[StatusCount]
    recent_orders: list[OrderListItem]
    top_items: list[TopMenuItem]
