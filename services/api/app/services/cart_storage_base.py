from __future__ import annotations

from typing import Any, Protocol

# Every persisted cart key lives under this namespace.
CART_STORAGE_NAMESPACE = "restaurant-cart"


class CartStorageError(Exception):
    """Raised by a storage backend when a cart snapshot cannot be read or written."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Cart storage failed for key={key!r}: {reason}")
        self.key = key
        self.reason = reason


class CartStorage(Protocol):
    """Durable key-value mirror for cart snapshots.

    ``load`` returns ``None`` when nothing was stored under ``key``. Implementations wrap
    their own I/O errors in :class:`CartStorageError`.
    """

    backend: str

    def load(self, key: str) -> dict[str, Any] | None: ...

    def save(self, key: str, payload: dict[str, Any]) -> None: ...


def scoped_key(client_id: str) -> str:
    return f"{CART_STORAGE_NAMESPACE}:{client_id}"
