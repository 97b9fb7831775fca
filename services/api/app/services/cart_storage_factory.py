from __future__ import annotations

import os

from services.api.app.services.cart_storage_base import CartStorage
from services.api.app.services.cart_storage_memory import InMemoryCartStorage


def get_cart_storage() -> CartStorage:
    """Select the durable mirror for carts based on env vars.

    Defaults to the database so guest carts survive a restart. ``memory`` is meant for
    tests; ``file`` writes one JSON document per cart under TAVOLA_CART_STORAGE_DIR.
    """

    mode = os.getenv("TAVOLA_CART_STORAGE", "db").strip().lower()

    if mode == "memory":
        return InMemoryCartStorage()

    if mode == "file":
        from services.api.app.services.cart_storage_file import FileCartStorage

        return FileCartStorage.from_env()

    if mode == "db":
        from services.api.app.services.cart_storage_db import DatabaseCartStorage

        return DatabaseCartStorage()

    raise ValueError(f"Unknown TAVOLA_CART_STORAGE={mode!r}. Expected memory, file or db.")
