"""Guest shopping cart.

A :class:`CartStore` holds the ordered line items a customer has picked before checkout.
Every mutation is mirrored to a :class:`CartStorage` backend, but the in-memory state is
authoritative: a failed write is logged and the next mutation writes the full state again.

Persisted payload (no schema version; changing it breaks stored carts)::

    {"items": [{"id", "menuItem", "quantity", "specialInstructions"}], "sessionId": "..."}
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from packages.shared.schemas.menu_v1 import MenuItemV1
from pydantic import ValidationError
from services.api.app.services.cart_storage_base import (
    CART_STORAGE_NAMESPACE,
    CartStorage,
    CartStorageError,
)
from services.api.app.services.ids import generate_line_id, generate_session_id
from services.api.app.services.totals import PricedLine

logger = logging.getLogger(__name__)


@dataclass
class CartLineItem:
    id: str
    menu_item: MenuItemV1
    quantity: int
    special_instructions: str | None = None

    @property
    def line_total(self) -> Decimal:
        return self.menu_item.price * self.quantity

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "menuItem": self.menu_item.model_dump(mode="json"),
            "quantity": self.quantity,
            "specialInstructions": self.special_instructions,
        }

    @classmethod
    def from_payload(cls, raw: dict[str, Any]) -> CartLineItem:
        return cls(
            id=str(raw["id"]),
            menu_item=MenuItemV1.model_validate(raw["menuItem"]),
            quantity=int(raw["quantity"]),
            special_instructions=raw.get("specialInstructions") or None,
        )


class CartStore:
    def __init__(self, storage: CartStorage, key: str = CART_STORAGE_NAMESPACE) -> None:
        self._storage = storage
        self._key = key
        self._items: list[CartLineItem] = []
        self._session_id = generate_session_id()
        self._restore()

    @property
    def key(self) -> str:
        return self._key

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def items(self) -> list[CartLineItem]:
        return list(self._items)

    def get_line(self, line_id: str) -> CartLineItem | None:
        return next((line for line in self._items if line.id == line_id), None)

    def add_item(
        self,
        menu_item: MenuItemV1,
        quantity: int = 1,
        special_instructions: str | None = None,
    ) -> CartLineItem:
        """Add ``quantity`` of ``menu_item``, merging into an existing line for the same item.

        A merge keeps the existing line's note. Availability is the caller's concern.
        """

        if quantity < 1:
            raise ValueError(f"quantity must be >= 1, got {quantity}")

        existing = next((line for line in self._items if line.menu_item.id == menu_item.id), None)
        if existing is not None:
            existing.quantity += quantity
            line = existing
        else:
            line = CartLineItem(
                id=self._new_line_id(),
                menu_item=menu_item,
                quantity=quantity,
                special_instructions=special_instructions or None,
            )
            self._items.append(line)

        self._persist()
        return line

    def remove_item(self, line_id: str) -> None:
        self._items = [line for line in self._items if line.id != line_id]
        self._persist()

    def update_quantity(self, line_id: str, quantity: int) -> None:
        if quantity < 1:
            self.remove_item(line_id)
            return

        line = self.get_line(line_id)
        if line is not None:
            line.quantity = quantity
        self._persist()

    def update_instructions(self, line_id: str, instructions: str | None) -> None:
        line = self.get_line(line_id)
        if line is not None:
            line.special_instructions = instructions or None
        self._persist()

    def clear_cart(self) -> None:
        self._items = []
        self._session_id = generate_session_id()
        self._persist()

    def get_item_count(self) -> int:
        return sum(line.quantity for line in self._items)

    def get_subtotal(self) -> Decimal:
        """Unrounded; rounding happens in the totals calculation."""
        return sum((line.line_total for line in self._items), Decimal("0"))

    def priced_lines(self) -> list[PricedLine]:
        return [PricedLine(line.quantity, line.menu_item.price) for line in self._items]

    def snapshot(self) -> dict[str, Any]:
        return {
            "items": [line.to_payload() for line in self._items],
            "sessionId": self._session_id,
        }

    def _new_line_id(self) -> str:
        taken = {line.id for line in self._items}
        line_id = generate_line_id()
        while line_id in taken:
            line_id = generate_line_id()
        return line_id

    def _persist(self) -> None:
        try:
            self._storage.save(self._key, self.snapshot())
        except CartStorageError as e:
            logger.warning("Cart %s not persisted, keeping in-memory state: %s", self._key, e)

    def _restore(self) -> None:
        try:
            payload = self._storage.load(self._key)
        except CartStorageError as e:
            logger.warning("Cart %s could not be loaded, starting empty: %s", self._key, e)
            return

        if payload is None:
            return

        try:
            items = [CartLineItem.from_payload(raw) for raw in payload.get("items") or []]
            session_id = str(payload["sessionId"])
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            logger.warning("Cart %s has an unreadable snapshot, starting empty: %s", self._key, e)
            return

        self._items = [line for line in items if line.quantity >= 1]
        self._session_id = session_id
