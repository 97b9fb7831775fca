from __future__ import annotations

import json
from typing import Any


class InMemoryCartStorage:
    """Process-local backend for tests and throwaway dev servers.

    Payloads go through ``json`` so callers never share mutable state with the store,
    the same as with the durable backends.
    """

    backend = "memory"

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def load(self, key: str) -> dict[str, Any] | None:
        raw = self._data.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    def save(self, key: str, payload: dict[str, Any]) -> None:
        self._data[key] = json.dumps(payload)

    def keys(self) -> list[str]:
        return sorted(self._data)
