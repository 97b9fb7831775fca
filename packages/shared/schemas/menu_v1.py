"""Shared menu item schema (v1).

Cart lines embed a copy of this payload so the price and name a guest saw stay frozen
after the menu changes.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MenuCategoryV1(str, Enum):
    APPETIZERS = "appetizers"
    MAIN_COURSES = "main_courses"
    DESSERTS = "desserts"
    BEVERAGES = "beverages"
    SALADS = "salads"
    SOUPS = "soups"
    SIDES = "sides"
    SPECIALS = "specials"


class MenuItemV1(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str

    name: str
    name_de: str
    description: str
    description_de: str

    price: Decimal = Field(..., gt=0)
    category: MenuCategoryV1
    image_url: str | None = None

    is_available: bool = True
    is_vegetarian: bool = False
    is_vegan: bool = False
    is_gluten_free: bool = False

    spice_level: int = Field(default=0, ge=0, le=3)
    preparation_time: int = Field(default=15, gt=0)  # minutes
    calories: int | None = Field(default=None, gt=0)
    allergens: list[str] = Field(default_factory=list)

    def localized_name(self, locale: str = "en") -> str:
        return self.name_de if locale == "de" else self.name

    def localized_description(self, locale: str = "en") -> str:
        return self.description_de if locale == "de" else self.description
