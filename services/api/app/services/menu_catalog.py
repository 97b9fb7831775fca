from __future__ import annotations

from decimal import Decimal

from packages.shared.schemas.menu_v1 import MenuCategoryV1, MenuItemV1
from services.api.app.db.models import MenuItem
from sqlalchemy.orm import Session


def to_schema(row: MenuItem) -> MenuItemV1:
    return MenuItemV1(
        id=row.id,
        name=row.name,
        name_de=row.name_de,
        description=row.description,
        description_de=row.description_de,
        price=row.price,
        category=MenuCategoryV1(row.category),
        image_url=row.image_url,
        is_available=row.is_available,
        is_vegetarian=row.is_vegetarian,
        is_vegan=row.is_vegan,
        is_gluten_free=row.is_gluten_free,
        spice_level=row.spice_level,
        preparation_time=row.preparation_time,
        calories=row.calories,
        allergens=list(row.allergens or []),
    )


def list_menu(
    db: Session,
    *,
    category: MenuCategoryV1 | None = None,
    search: str | None = None,
    locale: str = "en",
    vegetarian: bool = False,
    vegan: bool = False,
    gluten_free: bool = False,
    max_price: Decimal | None = None,
    spice_level: int | None = None,
    available_only: bool = False,
) -> list[MenuItemV1]:
    """Menu ordered by category then name.

    ``search`` matches the localized name or description, case-insensitively. Dietary
    flags only narrow the result when set.
    """

    query = db.query(MenuItem)
    if category is not None:
        query = query.filter(MenuItem.category == category.value)
    if vegetarian:
        query = query.filter(MenuItem.is_vegetarian.is_(True))
    if vegan:
        query = query.filter(MenuItem.is_vegan.is_(True))
    if gluten_free:
        query = query.filter(MenuItem.is_gluten_free.is_(True))
    if spice_level is not None:
        query = query.filter(MenuItem.spice_level == spice_level)
    if available_only:
        query = query.filter(MenuItem.is_available.is_(True))

    items = [to_schema(row) for row in query.order_by(MenuItem.category, MenuItem.name).all()]

    # Price and text filters run on the schema objects: exact Decimal comparison, and
    # the search field depends on the locale.
    if max_price is not None:
        items = [item for item in items if item.price <= max_price]
    if search:
        needle = search.lower()
        items = [
            item
            for item in items
            if needle in item.localized_name(locale).lower()
            or needle in item.localized_description(locale).lower()
        ]

    return items
