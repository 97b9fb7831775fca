from __future__ import annotations

from decimal import Decimal

import pytest
from packages.shared.schemas.menu_v1 import MenuCategoryV1, MenuItemV1
from services.api.app.services.cart_registry import CartRegistry, max_carts_from_env
from services.api.app.services.cart_storage_memory import InMemoryCartStorage


def _pizza() -> MenuItemV1:
    return MenuItemV1(
        id="pizza",
        name="Pizza",
        name_de="Pizza",
        description="Tomato and mozzarella.",
        description_de="Tomate und Mozzarella.",
        price=Decimal("10.00"),
        category=MenuCategoryV1.MAIN_COURSES,
        preparation_time=15,
    )


def test_registry_returns_same_store_per_client() -> None:
    registry = CartRegistry(InMemoryCartStorage(), max_carts=4)

    assert registry.get("a") is registry.get("a")
    assert registry.get("a") is not registry.get("b")
    assert registry.get("a").key == "restaurant-cart:a"


def test_registry_size_stays_bounded() -> None:
    registry = CartRegistry(InMemoryCartStorage(), max_carts=3)

    for n in range(50):
        registry.get(f"client-{n}")

    assert len(registry) == 3


def test_least_recently_used_store_is_evicted_and_restored() -> None:
    storage = InMemoryCartStorage()
    registry = CartRegistry(storage, max_carts=2)

    first = registry.get("a")
    first.add_item(_pizza(), 2)
    registry.get("b")
    registry.get("a")
    registry.get("c")

    # "b" was least recently used; "a" is still the same in-memory store.
    assert registry.get("a") is first

    registry.get("d")
    registry.get("e")
    restored = registry.get("a")

    assert restored is not first
    assert restored.session_id == first.session_id
    assert restored.get_item_count() == 2


def test_max_carts_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TAVOLA_CART_CACHE_SIZE", raising=False)
    assert max_carts_from_env() == 1000

    monkeypatch.setenv("TAVOLA_CART_CACHE_SIZE", " 25 ")
    assert max_carts_from_env() == 25

    monkeypatch.setenv("TAVOLA_CART_CACHE_SIZE", "0")
    with pytest.raises(ValueError):
        max_carts_from_env()
