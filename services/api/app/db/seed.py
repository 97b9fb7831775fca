"""Starter menu for local development and tests."""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

from services.api.app.db.models import Inventory, MenuItem
from sqlalchemy.orm import Session

SEED_MENU: tuple[dict, ...] = (
    {
        "id": "bruschetta",
        "name": "Bruschetta",
        "name_de": "Bruschetta",
        "description": "Grilled bread with tomatoes, garlic and basil.",
        "description_de": "Geröstetes Brot mit Tomaten, Knoblauch und Basilikum.",
        "price": Decimal("6.50"),
        "category": "appetizers",
        "is_vegetarian": True,
        "is_vegan": True,
        "preparation_time": 10,
        "calories": 240,
        "allergens": ["gluten"],
    },
    {
        "id": "margherita",
        "name": "Pizza Margherita",
        "name_de": "Pizza Margherita",
        "description": "Tomato sauce, mozzarella and fresh basil.",
        "description_de": "Tomatensauce, Mozzarella und frisches Basilikum.",
        "price": Decimal("10.00"),
        "category": "main_courses",
        "is_vegetarian": True,
        "preparation_time": 20,
        "calories": 850,
        "allergens": ["gluten", "dairy"],
    },
    {
        "id": "arrabbiata",
        "name": "Penne all'Arrabbiata",
        "name_de": "Penne all'Arrabbiata",
        "description": "Penne in a spicy tomato and chili sauce.",
        "description_de": "Penne in scharfer Tomaten-Chili-Sauce.",
        "price": Decimal("9.99"),
        "category": "main_courses",
        "is_vegetarian": True,
        "is_vegan": True,
        "spice_level": 2,
        "preparation_time": 18,
        "calories": 620,
        "allergens": ["gluten"],
    },
    {
        "id": "minestrone",
        "name": "Minestrone",
        "name_de": "Minestrone",
        "description": "Vegetable soup with beans and seasonal greens.",
        "description_de": "Gemüsesuppe mit Bohnen und saisonalem Grün.",
        "price": Decimal("5.50"),
        "category": "soups",
        "is_vegetarian": True,
        "is_vegan": True,
        "is_gluten_free": True,
        "preparation_time": 8,
        "calories": 210,
    },
    {
        "id": "tiramisu",
        "name": "Tiramisu",
        "name_de": "Tiramisu",
        "description": "Mascarpone cream layered with espresso-soaked ladyfingers.",
        "description_de": "Mascarponecreme mit in Espresso getränkten Löffelbiskuits.",
        "price": Decimal("6.00"),
        "category": "desserts",
        "is_vegetarian": True,
        "preparation_time": 5,
        "calories": 450,
        "allergens": ["gluten", "dairy", "eggs"],
    },
    {
        "id": "lemonade",
        "name": "Homemade Lemonade",
        "name_de": "Hausgemachte Limonade",
        "description": "Fresh lemons, mint and a little cane sugar.",
        "description_de": "Frische Zitronen, Minze und etwas Rohrzucker.",
        "price": Decimal("3.50"),
        "category": "beverages",
        "is_vegetarian": True,
        "is_vegan": True,
        "is_gluten_free": True,
        "preparation_time": 3,
    },
)

DEFAULT_STOCK = 50


def seed_menu(db: Session, stock: int = DEFAULT_STOCK) -> int:
    """Insert the starter menu and its inventory rows. Existing ids are left alone."""

    added = 0
    for raw in SEED_MENU:
        if db.get(MenuItem, raw["id"]) is not None:
            continue
        db.add(MenuItem(**raw))
        db.add(Inventory(id=uuid4().hex, menu_item_id=raw["id"], quantity=stock))
        added += 1

    db.commit()
    return added
