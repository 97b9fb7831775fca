from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient


@pytest.fixture()
def client(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    db_path = tmp_path / "tavola_orders.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+pysqlite:///{db_path}")
    monkeypatch.setenv("TAVOLA_DB_AUTO_CREATE", "true")
    monkeypatch.setenv("TAVOLA_CART_STORAGE", "memory")
    monkeypatch.setenv("TAVOLA_PAYMENT_ADAPTER", "mock")

    from services.api.app.db.database import db_session
    from services.api.app.db.seed import seed_menu
    from services.api.app.main import app
    from services.api.app.services.cart_registry import carts

    carts.reset()
    with TestClient(app) as c:
        db = db_session()
        try:
            seed_menu(db)
        finally:
            db.close()
        yield c


def _place_order(client: TestClient, *, email: str = "ada@example.com", user_id: str | None = None) -> dict:
    client.post("/v1/cart/device-1/items", json={"menu_item_id": "minestrone", "quantity": 2})
    resp = client.post(
        "/v1/checkout",
        json={
            "client_id": "device-1",
            "user_id": user_id,
            "customer_name": "Ada Lovelace",
            "customer_email": email,
            "customer_phone": "0170 1234567",
            "order_type": "pickup",
            "payment_method": "cash",
        },
    )
    assert resp.status_code == 201
    return resp.json()


def test_get_order_returns_items_and_payment(client: TestClient) -> None:
    placed = _place_order(client)

    resp = client.get(f"/v1/orders/{placed['id']}")
    assert resp.status_code == 200

    order = resp.json()
    assert order == placed
    assert order["items"][0]["menu_item_name"] == "Minestrone"
    assert order["payment"]["status"] == "completed"


def test_get_missing_order_is_404(client: TestClient) -> None:
    assert client.get("/v1/orders/missing").status_code == 404
    assert client.get("/v1/orders/missing/events").status_code == 404


def test_list_orders_by_user_and_email(client: TestClient) -> None:
    mine = _place_order(client, user_id="u-1")
    _place_order(client, email="grace@example.com", user_id="u-2")

    by_user = client.get("/v1/orders", params={"user_id": "u-1"}).json()
    assert [o["id"] for o in by_user] == [mine["id"]]
    assert by_user[0]["item_count"] == 2
    assert by_user[0]["total"] == mine["total"]

    by_email = client.get("/v1/orders", params={"customer_email": "grace@example.com"}).json()
    assert len(by_email) == 1
    assert by_email[0]["id"] != mine["id"]


def test_list_orders_requires_a_filter(client: TestClient) -> None:
    assert client.get("/v1/orders").status_code == 422


def test_order_events_track_status_history(client: TestClient) -> None:
    placed = _place_order(client)

    client.post(f"/v1/admin/orders/{placed['id']}/advance")
    client.post(f"/v1/admin/orders/{placed['id']}/status", json={"status": "cancelled"})

    resp = client.get(f"/v1/orders/{placed['id']}/events")
    assert resp.status_code == 200

    events = resp.json()
    types = [e["event_type"] for e in events]
    assert set(types[:2]) == {"ORDER_PLACED", "PAYMENT_COMPLETED"}
    assert types[2:] == ["ORDER_STATUS_CHANGED", "ORDER_STATUS_CHANGED"]
    assert events[2]["payload"] == {"from": "pending", "to": "confirmed"}
    assert events[3]["payload"] == {"from": "confirmed", "to": "cancelled"}

    assert client.get(f"/v1/orders/{placed['id']}").json()["status"] == "cancelled"
