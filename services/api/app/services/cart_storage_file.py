from __future__ import annotations

import json
import os
import re
from pathlib import Path
from typing import Any

from services.api.app.services.cart_storage_base import CartStorageError

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class FileCartStorage:
    """One JSON file per cart key inside ``root``."""

    backend = "file"

    def __init__(self, root: Path) -> None:
        self.root = root

    @classmethod
    def from_env(cls) -> FileCartStorage:
        root = os.getenv("TAVOLA_CART_STORAGE_DIR", ".local/carts").strip()
        return cls(Path(root).expanduser())

    def path_for(self, key: str) -> Path:
        return self.root / f"{_UNSAFE_CHARS.sub('_', key)}.json"

    def load(self, key: str) -> dict[str, Any] | None:
        path = self.path_for(key)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise CartStorageError(key, str(e)) from e

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CartStorageError(key, f"invalid JSON in {path}") from e

        if not isinstance(payload, dict):
            raise CartStorageError(key, f"expected a JSON object in {path}")
        return payload

    def save(self, key: str, payload: dict[str, Any]) -> None:
        path = self.path_for(key)
        tmp = path.with_suffix(".json.tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(payload, indent=2), encoding="utf-8")
            tmp.replace(path)
        except OSError as e:
            raise CartStorageError(key, str(e)) from e
