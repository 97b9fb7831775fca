from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from packages.shared.schemas.order_v1 import OrderStatusV1
from services.api.app.db.models import Order, OrderItem
from services.api.app.models.admin import DashboardStats, StatusCount, TopMenuItem
from services.api.app.services.orders import order_to_list_item
from services.api.app.services.totals import round2
from sqlalchemy import func
from sqlalchemy.orm import Session


def _revenue(orders: list[Order]) -> Decimal:
    return sum((order.total for order in orders), Decimal("0"))


def build_dashboard(db: Session, now: datetime | None = None) -> DashboardStats:
    """Back-office summary. "Today" is the current UTC calendar day."""

    now = now or datetime.utcnow()
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)

    orders = db.query(Order).order_by(Order.created_at.desc()).all()
    today = [order for order in orders if order.created_at >= midnight]

    total_revenue = _revenue(orders)
    average = total_revenue / len(orders) if orders else Decimal("0")

    top_rows = (
        db.query(
            OrderItem.menu_item_id,
            func.max(OrderItem.menu_item_name),
            func.sum(OrderItem.quantity),
            func.sum(OrderItem.total_price),
        )
        .group_by(OrderItem.menu_item_id)
        .order_by(func.sum(OrderItem.quantity).desc())
        .limit(5)
        .all()
    )

    return DashboardStats(
        total_orders=len(orders),
        total_revenue=round2(total_revenue),
        average_order_value=round2(average),
        pending_orders=sum(1 for o in orders if o.status == OrderStatusV1.PENDING.value),
        today_orders=len(today),
        today_revenue=round2(_revenue(today)),
        orders_by_status=[
            StatusCount(status=status, count=sum(1 for o in orders if o.status == status.value))
            for status in OrderStatusV1
        ],
        recent_orders=[order_to_list_item(order) for order in orders[:5]],
        top_items=[
            TopMenuItem(
                menu_item_id=menu_item_id,
                menu_item_name=name,
                total_ordered=int(quantity or 0),
                revenue=round2(Decimal(str(revenue or 0))),
            )
            for menu_item_id, name, quantity, revenue in top_rows
        ],
    )
