from __future__ import annotations

from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Query
from packages.shared.schemas.order_v1 import OrderTypeV1
from services.api.app.db.deps import get_carts, get_db
from services.api.app.db.models import MenuItem
from services.api.app.models.cart import (
    AddToCartRequest,
    CartLineOut,
    CartOut,
    UpdateCartLineRequest,
)
from services.api.app.models.checkout import OrderTotalsOut
from services.api.app.services.cart_registry import CartRegistry
from services.api.app.services.cart_store import CartStore
from services.api.app.services.menu_catalog import to_schema
from services.api.app.services.totals import calculate_order_totals
from sqlalchemy.orm import Session

router = APIRouter(prefix="/v1/cart", tags=["cart"])


def _cart_out(client_id: str, cart: CartStore) -> CartOut:
    return CartOut(
        client_id=client_id,
        session_id=cart.session_id,
        items=[
            CartLineOut(
                id=line.id,
                menu_item=line.menu_item,
                quantity=line.quantity,
                special_instructions=line.special_instructions,
                line_total=line.line_total,
            )
            for line in cart.items
        ],
        item_count=cart.get_item_count(),
        subtotal=cart.get_subtotal(),
    )


@router.get("/{client_id}", response_model=CartOut)
def get_cart(client_id: str, carts: CartRegistry = Depends(get_carts)) -> CartOut:
    return _cart_out(client_id, carts.get(client_id))


@router.post("/{client_id}/items", response_model=CartOut)
def add_to_cart(
    client_id: str,
    payload: AddToCartRequest,
    db: Session = Depends(get_db),
    carts: CartRegistry = Depends(get_carts),
) -> CartOut:
    row = db.get(MenuItem, payload.menu_item_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Menu item not found")
    if not row.is_available:
        raise HTTPException(status_code=409, detail=f"{row.name} is currently unavailable")

    cart = carts.get(client_id)
    cart.add_item(to_schema(row), payload.quantity, payload.special_instructions)
    return _cart_out(client_id, cart)


@router.patch("/{client_id}/items/{line_id}", response_model=CartOut)
def update_cart_line(
    client_id: str,
    line_id: str,
    payload: UpdateCartLineRequest,
    carts: CartRegistry = Depends(get_carts),
) -> CartOut:
    cart = carts.get(client_id)
    if cart.get_line(line_id) is None:
        raise HTTPException(status_code=404, detail="Item not in cart")

    fields = payload.model_fields_set
    if "special_instructions" in fields:
        cart.update_instructions(line_id, payload.special_instructions)
    if "quantity" in fields and payload.quantity is not None:
        cart.update_quantity(line_id, payload.quantity)

    return _cart_out(client_id, cart)


@router.delete("/{client_id}/items/{line_id}", response_model=CartOut)
def remove_cart_line(
    client_id: str,
    line_id: str,
    carts: CartRegistry = Depends(get_carts),
) -> CartOut:
    cart = carts.get(client_id)
    cart.remove_item(line_id)
    return _cart_out(client_id, cart)


@router.delete("/{client_id}", response_model=CartOut)
def clear_cart(client_id: str, carts: CartRegistry = Depends(get_carts)) -> CartOut:
    cart = carts.get(client_id)
    cart.clear_cart()
    return _cart_out(client_id, cart)


@router.get("/{client_id}/totals", response_model=OrderTotalsOut)
def preview_totals(
    client_id: str,
    tip: Decimal = Query(default=Decimal("0"), ge=0),
    order_type: OrderTypeV1 = OrderTypeV1.DELIVERY,
    carts: CartRegistry = Depends(get_carts),
) -> OrderTotalsOut:
    totals = calculate_order_totals(carts.get(client_id).priced_lines(), tip, order_type)
    return OrderTotalsOut(
        subtotal=totals.subtotal,
        tax=totals.tax,
        delivery_fee=totals.delivery_fee,
        tip=totals.tip,
        total=totals.total,
    )
