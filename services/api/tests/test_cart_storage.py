from __future__ import annotations

from pathlib import Path

import pytest
from services.api.app.services.cart_storage_base import CartStorageError, scoped_key
from services.api.app.services.cart_storage_factory import get_cart_storage
from services.api.app.services.cart_storage_file import FileCartStorage
from services.api.app.services.cart_storage_memory import InMemoryCartStorage


def test_scoped_key_uses_fixed_namespace() -> None:
    assert scoped_key("device-1") == "restaurant-cart:device-1"


def test_memory_storage_returns_copies() -> None:
    storage = InMemoryCartStorage()
    payload = {"items": [], "sessionId": "sess_1"}
    storage.save("k", payload)
    payload["sessionId"] = "mutated"

    assert storage.load("k") == {"items": [], "sessionId": "sess_1"}
    assert storage.load("missing") is None


def test_file_storage_round_trip(tmp_path: Path) -> None:
    storage = FileCartStorage(tmp_path / "carts")
    storage.save("restaurant-cart:device/1", {"items": [], "sessionId": "sess_1"})

    path = storage.path_for("restaurant-cart:device/1")
    assert path.parent == tmp_path / "carts"
    assert path.name == "restaurant-cart_device_1.json"
    assert storage.load("restaurant-cart:device/1") == {"items": [], "sessionId": "sess_1"}
    assert storage.load("restaurant-cart:other") is None


def test_file_storage_wraps_invalid_json(tmp_path: Path) -> None:
    storage = FileCartStorage(tmp_path)
    storage.path_for("k").write_text("{not json", encoding="utf-8")

    with pytest.raises(CartStorageError, match="invalid JSON"):
        storage.load("k")


def test_file_storage_wraps_write_errors(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    storage = FileCartStorage(blocker / "carts")

    with pytest.raises(CartStorageError):
        storage.save("k", {"items": [], "sessionId": "s"})


def test_db_storage_round_trip(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", f"sqlite+pysqlite:///{tmp_path / 'carts.db'}")
    monkeypatch.setenv("TAVOLA_DB_AUTO_CREATE", "true")

    from services.api.app.db.init_db import init_db
    from services.api.app.services.cart_storage_db import DatabaseCartStorage

    init_db()
    storage = DatabaseCartStorage()

    assert storage.load("restaurant-cart:a") is None
    storage.save("restaurant-cart:a", {"items": [], "sessionId": "sess_1"})
    storage.save("restaurant-cart:a", {"items": [], "sessionId": "sess_2"})
    assert storage.load("restaurant-cart:a") == {"items": [], "sessionId": "sess_2"}


@pytest.mark.parametrize("stored", [["junk"], "junk", 42])
def test_db_storage_rejects_non_object_payload(
    stored: object, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("DATABASE_URL", f"sqlite+pysqlite:///{tmp_path / 'corrupt.db'}")
    monkeypatch.setenv("TAVOLA_DB_AUTO_CREATE", "true")

    from services.api.app.db.database import session_scope
    from services.api.app.db.init_db import init_db
    from services.api.app.db.models import CartSnapshot
    from services.api.app.services.cart_storage_db import DatabaseCartStorage

    init_db()
    with session_scope() as db:
        db.add(CartSnapshot(key="restaurant-cart:x", payload_json=stored))

    with pytest.raises(CartStorageError):
        DatabaseCartStorage().load("restaurant-cart:x")


def test_db_storage_wraps_missing_table(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", f"sqlite+pysqlite:///{tmp_path / 'empty.db'}")

    from services.api.app.services.cart_storage_db import DatabaseCartStorage

    with pytest.raises(CartStorageError):
        DatabaseCartStorage().save("k", {"items": [], "sessionId": "s"})


def test_get_cart_storage_defaults_to_db(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TAVOLA_CART_STORAGE", raising=False)
    assert get_cart_storage().backend == "db"


def test_get_cart_storage_file_uses_env_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TAVOLA_CART_STORAGE", "file")
    monkeypatch.setenv("TAVOLA_CART_STORAGE_DIR", str(tmp_path))

    storage = get_cart_storage()

    assert isinstance(storage, FileCartStorage)
    assert storage.root == tmp_path


def test_get_cart_storage_rejects_unknown(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TAVOLA_CART_STORAGE", "nope")
    with pytest.raises(ValueError, match="Unknown TAVOLA_CART_STORAGE"):
        get_cart_storage()
