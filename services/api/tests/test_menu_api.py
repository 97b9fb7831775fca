from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import pytest
from fastapi.testclient import TestClient


@pytest.fixture()
def client(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    db_path = tmp_path / "tavola_menu.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+pysqlite:///{db_path}")
    monkeypatch.setenv("TAVOLA_DB_AUTO_CREATE", "true")

    from services.api.app.db.database import db_session
    from services.api.app.db.seed import seed_menu
    from services.api.app.main import app

    with TestClient(app) as c:
        db = db_session()
        try:
            seed_menu(db)
        finally:
            db.close()
        yield c


def _ids(resp) -> list[str]:
    assert resp.status_code == 200
    return [item["id"] for item in resp.json()]


def test_menu_is_ordered_by_category_then_name(client: TestClient) -> None:
    items = client.get("/v1/menu").json()
    keys = [(i["category"], i["name"]) for i in items]
    assert keys == sorted(keys)
    assert items[0]["in_stock"] == 50


def test_menu_filters(client: TestClient) -> None:
    assert _ids(client.get("/v1/menu", params={"category": "soups"})) == ["minestrone"]
    assert "margherita" not in _ids(client.get("/v1/menu", params={"vegan": True}))
    assert _ids(client.get("/v1/menu", params={"gluten_free": True, "category": "beverages"})) == [
        "lemonade"
    ]
    assert _ids(client.get("/v1/menu", params={"spice_level": 2})) == ["arrabbiata"]

    cheap = _ids(client.get("/v1/menu", params={"max_price": "5.50"}))
    assert set(cheap) == {"minestrone", "lemonade"}


def test_menu_search_uses_locale(client: TestClient) -> None:
    assert _ids(client.get("/v1/menu", params={"search": "limonade", "locale": "de"})) == ["lemonade"]
    assert _ids(client.get("/v1/menu", params={"search": "limonade"})) == []
    assert _ids(client.get("/v1/menu", params={"search": "MINT"})) == ["lemonade"]


def test_menu_rejects_bad_filters(client: TestClient) -> None:
    assert client.get("/v1/menu", params={"category": "breakfast"}).status_code == 422
    assert client.get("/v1/menu", params={"spice_level": 5}).status_code == 422


def test_get_menu_item(client: TestClient) -> None:
    resp = client.get("/v1/menu/tiramisu")
    assert resp.status_code == 200

    item = resp.json()
    assert item["price"] == "6.00"
    assert item["allergens"] == ["gluten", "dairy", "eggs"]
    assert item["name_de"] == "Tiramisu"

    assert client.get("/v1/menu/missing").status_code == 404


def test_list_menu_zero_max_price_matches_nothing(client: TestClient) -> None:
    from services.api.app.db.database import db_session
    from services.api.app.services.menu_catalog import list_menu

    db = db_session()
    try:
        assert list_menu(db, max_price=Decimal("0")) == []
        assert [i.id for i in list_menu(db, max_price=Decimal("3.50"))] == ["lemonade"]
    finally:
        db.close()
