from __future__ import annotations

from datetime import datetime
from typing import Any

from services.api.app.db.database import session_scope
from services.api.app.db.models import CartSnapshot
from services.api.app.services.cart_storage_base import CartStorageError
from sqlalchemy.exc import SQLAlchemyError


class DatabaseCartStorage:
    """Keeps cart snapshots in the ``cart_snapshots`` table, one row per key."""

    backend = "db"

    def load(self, key: str) -> dict[str, Any] | None:
        try:
            with session_scope() as db:
                row = db.get(CartSnapshot, key)
                payload = row.payload_json if row is not None else None
        except SQLAlchemyError as e:
            raise CartStorageError(key, str(e)) from e

        if payload is None:
            return None
        if not isinstance(payload, dict):
            raise CartStorageError(key, "expected a JSON object in cart_snapshots")
        return dict(payload)

    def save(self, key: str, payload: dict[str, Any]) -> None:
        try:
            with session_scope() as db:
                row = db.get(CartSnapshot, key)
                if row is None:
                    db.add(CartSnapshot(key=key, payload_json=payload))
                else:
                    row.payload_json = payload
                    row.updated_at = datetime.utcnow()
        except SQLAlchemyError as e:
            raise CartStorageError(key, str(e)) from e
