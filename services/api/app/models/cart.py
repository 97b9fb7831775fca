from __future__ import annotations

from decimal import Decimal

from packages.shared.schemas.menu_v1 import MenuItemV1
from pydantic import BaseModel, Field


class AddToCartRequest(BaseModel):
    menu_item_id: str
    quantity: int = Field(default=1, ge=1)
    special_instructions: str | None = Field(default=None, max_length=500)


class UpdateCartLineRequest(BaseModel):
    # Zero or negative removes the line.
    quantity: int | None = None
    special_instructions: str | None = Field(default=None, max_length=500)


class CartLineOut(BaseModel):
    id: str
    menu_item: MenuItemV1
    quantity: int
    special_instructions: str | None = None
    line_total: Decimal


class CartOut(BaseModel):
    client_id: str
    session_id: str
    items: list[CartLineOut]
    item_count: int
    subtotal: Decimal
