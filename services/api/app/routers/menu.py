from __future__ import annotations

from decimal import Decimal
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query
from packages.shared.schemas.menu_v1 import MenuCategoryV1
from services.api.app.db.deps import get_db
from services.api.app.db.models import Inventory, MenuItem
from services.api.app.models.menu import MenuItemOut
from services.api.app.services.menu_catalog import list_menu, to_schema
from sqlalchemy.orm import Session

router = APIRouter()


@router.get("/v1/menu", response_model=list[MenuItemOut])
def get_menu(
    category: MenuCategoryV1 | None = None,
    search: str | None = None,
    locale: Literal["en", "de"] = "en",
    vegetarian: bool = False,
    vegan: bool = False,
    gluten_free: bool = False,
    max_price: Decimal | None = Query(default=None, gt=0),
    spice_level: int | None = Query(default=None, ge=0, le=3),
    available_only: bool = False,
    db: Session = Depends(get_db),
) -> list[MenuItemOut]:
    items = list_menu(
        db,
        category=category,
        search=search,
        locale=locale,
        vegetarian=vegetarian,
        vegan=vegan,
        gluten_free=gluten_free,
        max_price=max_price,
        spice_level=spice_level,
        available_only=available_only,
    )

    stock = {row.menu_item_id: row.quantity for row in db.query(Inventory).all()}
    return [MenuItemOut(**item.model_dump(), in_stock=stock.get(item.id)) for item in items]


@router.get("/v1/menu/{menu_item_id}", response_model=MenuItemOut)
def get_menu_item(menu_item_id: str, db: Session = Depends(get_db)) -> MenuItemOut:
    row = db.get(MenuItem, menu_item_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Menu item not found")

    inventory = db.query(Inventory).filter(Inventory.menu_item_id == row.id).first()
    return MenuItemOut(
        **to_schema(row).model_dump(),
        in_stock=inventory.quantity if inventory is not None else None,
    )
