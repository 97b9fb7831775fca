from __future__ import annotations

import logging
import os
from collections import OrderedDict

from services.api.app.services.cart_storage_base import CartStorage, scoped_key
from services.api.app.services.cart_storage_factory import get_cart_storage
from services.api.app.services.cart_store import CartStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_CARTS = 1000


def max_carts_from_env() -> int:
    raw = os.getenv("TAVOLA_CART_CACHE_SIZE", str(DEFAULT_MAX_CARTS)).strip()
    value = int(raw)
    if value < 1:
        raise ValueError(f"TAVOLA_CART_CACHE_SIZE must be >= 1, got {raw!r}")
    return value


class CartRegistry:
    """Process-local cart stores, one per client id.

    A store is restored from durable storage the first time its client is seen. At most
    ``max_carts`` stores stay in memory; the least recently used one is dropped first and
    restored from storage on its next access.
    """

    def __init__(self, storage: CartStorage | None = None, max_carts: int | None = None) -> None:
        self._storage = storage
        self._max_carts = max_carts
        self._carts: OrderedDict[str, CartStore] = OrderedDict()

    @property
    def storage(self) -> CartStorage:
        if self._storage is None:
            self._storage = get_cart_storage()
        return self._storage

    @property
    def max_carts(self) -> int:
        if self._max_carts is None:
            self._max_carts = max_carts_from_env()
        return self._max_carts

    def __len__(self) -> int:
        return len(self._carts)

    def get(self, client_id: str) -> CartStore:
        cart = self._carts.get(client_id)
        if cart is not None:
            self._carts.move_to_end(client_id)
            return cart

        cart = CartStore(self.storage, key=scoped_key(client_id))
        self._carts[client_id] = cart
        while len(self._carts) > self.max_carts:
            evicted, _ = self._carts.popitem(last=False)
            logger.debug("Evicted cart %s from memory", evicted)
        return cart

    def reset(self, storage: CartStorage | None = None, max_carts: int | None = None) -> None:
        self._storage = storage
        self._max_carts = max_carts
        self._carts.clear()


carts = CartRegistry()
