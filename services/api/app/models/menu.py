from __future__ import annotations

from decimal import Decimal

from packages.shared.schemas.menu_v1 import MenuCategoryV1, MenuItemV1
from pydantic import BaseModel, Field


class MenuItemOut(MenuItemV1):
    in_stock: int | None = None


class MenuItemForm(BaseModel):
    """Back-office create/update payload."""

    name: str = Field(..., min_length=2, max_length=100)
    name_de: str = Field(..., min_length=2, max_length=100)
    description: str = Field(..., min_length=10, max_length=500)
    description_de: str = Field(..., min_length=10, max_length=500)

    price: Decimal = Field(..., gt=0)
    category: MenuCategoryV1
    image_url: str | None = Field(default=None, pattern=r"^(https?://\S+)?$")

    is_available: bool = True
    is_vegetarian: bool = False
    is_vegan: bool = False
    is_gluten_free: bool = False

    spice_level: int = Field(default=0, ge=0, le=3)
    preparation_time: int = Field(..., gt=0)
    calories: int | None = Field(default=None, gt=0)
    allergens: list[str] = Field(default_factory=list)


class AvailabilityUpdate(BaseModel):
    is_available: bool
