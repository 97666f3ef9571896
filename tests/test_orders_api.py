"""Tests for the order placement and order history endpoints."""
import pytest
from fastapi.testclient import TestClient

from storefront.core.config import Settings, get_settings
from storefront.database import PersistenceError, MemoryDocumentStore
from storefront.main import app


def test_place_order_persists_submitted_fields(api, document_store, order_payload):
    response = api.post("/api/orders/place", json=order_payload)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")
    order = response.json()
    assert order["_id"]
    assert order["totalAmount"] == 200
    assert order["paymentStatus"] == "pending"
    assert order["products"] == [{"productId": "p1", "name": "Widget", "price": 100, "quantity": 2}]
    assert document_store.count("order") == 1


def test_place_order_without_key_is_not_deduplicated(api, document_store, order_payload):
    first = api.post("/api/orders/place", json=order_payload).json()
    second = api.post("/api/orders/place", json=order_payload).json()

    assert first["_id"] != second["_id"]
    assert document_store.count("order") == 2


def test_idempotency_key_replays_first_order(api, document_store, order_payload):
    headers = {"Idempotency-Key": "checkout-123"}
    first = api.post("/api/orders/place", json=order_payload, headers=headers)
    second = api.post("/api/orders/place", json=order_payload, headers=headers)

    assert first.status_code == second.status_code == 200
    assert first.json()["_id"] == second.json()["_id"]
    assert "idempotencyKey" not in second.json()
    assert document_store.count("order") == 1


def test_total_must_match_line_items(api, document_store, order_payload):
    order_payload["totalAmount"] = 150

    response = api.post("/api/orders/place", json=order_payload)

    assert response.status_code == 400
    assert response.json() == {"error": "Order total does not match line items"}
    assert document_store.count("order") == 0


def test_price_must_match_catalog(api, document_store, order_payload):
    order_payload["products"][0]["price"] = 1
    order_payload["totalAmount"] = 2

    response = api.post("/api/orders/place", json=order_payload)

    assert response.status_code == 400
    assert response.json() == {"error": "Price mismatch for Widget"}
    assert document_store.count("order") == 0


def test_unknown_product_is_rejected(api, order_payload):
    order_payload["products"][0]["productId"] = "nope"

    response = api.post("/api/orders/place", json=order_payload)

    assert response.status_code == 400
    assert response.json()["error"] == "Unknown product: nope"


def test_catalog_check_can_be_disabled(api, order_payload):
    app.dependency_overrides[get_settings] = lambda: Settings(verify_order_prices=False)
    order_payload["products"][0]["productId"] = "not-in-catalog"

    response = api.post("/api/orders/place", json=order_payload)

    assert response.status_code == 200


@pytest.mark.parametrize("method,status", [("cod", "paid"), ("upi", "pending"), ("card", "pending")])
def test_inconsistent_payment_status_is_rejected(api, order_payload, method, status):
    order_payload["paymentMethod"] = method
    order_payload["paymentStatus"] = status

    response = api.post("/api/orders/place", json=order_payload)

    assert response.status_code == 422
    assert "paymentStatus" in response.json()["error"]


def test_malformed_payload_uses_error_shape(api, order_payload):
    del order_payload["user"]["email"]
    order_payload["paymentMethod"] = "bitcoin"

    response = api.post("/api/orders/place", json=order_payload)

    assert response.status_code == 422
    body = response.json()
    assert isinstance(body["error"], str)
    assert body["details"]


def test_empty_order_is_rejected(api, order_payload):
    order_payload["products"] = []
    order_payload["totalAmount"] = 0

    assert api.post("/api/orders/place", json=order_payload).status_code == 422


def test_persistence_failure_is_generic(api, document_store, order_payload, monkeypatch, caplog):
    def broken_insert(collection, document):
        raise PersistenceError("E11000 duplicate key error collection: shop.order")

    monkeypatch.setattr(document_store, "insert_one", broken_insert)

    response = api.post("/api/orders/place", json=order_payload)

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to place order"}
    assert "E11000" not in response.text
    assert "E11000" in caplog.text


def test_list_orders_newest_first(api, order_payload):
    api.post("/api/orders/place", json=order_payload)
    order_payload["orderDate"] = "2026-10-19T09:30:00+00:00"
    api.post("/api/orders/place", json=order_payload)

    response = api.get("/api/orders")

    assert response.status_code == 200
    dates = [o["orderDate"] for o in response.json()]
    assert len(dates) == 2
    assert dates[0] > dates[1]


def test_list_orders_failure(api, document_store, monkeypatch):
    def broken_find(collection, query=None):
        raise PersistenceError("connection refused")

    monkeypatch.setattr(document_store, "find", broken_find)

    response = api.get("/api/orders")

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch orders"}


def test_health_reports_database(api):
    response = api.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "storefront", "database": "connected"}


def test_unknown_route_uses_error_shape(api):
    response = api.get("/api/does-not-exist")

    assert response.status_code == 404
    assert "error" in response.json()


def test_memory_store_starts_empty():
    store = MemoryDocumentStore()
    assert store.list_collection_names() == []


def test_order_date_is_stored_as_submitted(api, document_store, order_payload):
    order_payload["orderDate"] = "2026-10-18T09:30:00.000Z"

    response = api.post("/api/orders/place", json=order_payload)

    assert response.status_code == 200
    assert response.json()["orderDate"] == "2026-10-18T09:30:00.000Z"
    assert document_store.find("order")[0]["orderDate"] == "2026-10-18T09:30:00.000Z"
    assert api.get("/api/orders").json()[0]["orderDate"] == "2026-10-18T09:30:00.000Z"


@pytest.mark.parametrize("order_date", ["yesterday", "2026-13-45T99:00:00Z", ""])
def test_order_date_must_be_a_timestamp(api, document_store, order_payload, order_date):
    order_payload["orderDate"] = order_date

    response = api.post("/api/orders/place", json=order_payload)

    assert response.status_code == 422
    assert response.json()["error"].startswith("orderDate")
    assert document_store.count("order") == 0


@pytest.mark.parametrize("limit", [0, -1, 501])
def test_list_orders_limit_is_bounded(api, order_payload, limit):
    api.post("/api/orders/place", json=order_payload)

    response = api.get(f"/api/orders?limit={limit}")

    assert response.status_code == 422
    assert "limit" in response.json()["error"]


def test_list_orders_limit(api, order_payload):
    for day in ("17", "18", "19"):
        order_payload["orderDate"] = f"2026-10-{day}T09:30:00+00:00"
        api.post("/api/orders/place", json=order_payload)

    response = api.get("/api/orders?limit=2")

    assert [o["orderDate"][:10] for o in response.json()] == ["2026-10-19", "2026-10-18"]


def test_unencodable_order_is_generic_failure(mongo_api, order_payload, caplog):
    app.dependency_overrides[get_settings] = lambda: Settings(verify_order_prices=False)
    order_payload["products"][0]["quantity"] = 10**20
    order_payload["totalAmount"] = 100 * 10**20

    response = mongo_api.post("/api/orders/place", json=order_payload)

    assert response.status_code == 500
    assert response.headers["content-type"].startswith("application/json")
    assert response.json() == {"error": "Failed to place order"}
    assert "Error placing order" in caplog.text


def test_unexpected_error_keeps_error_shape(api, document_store, monkeypatch):
    def broken_find(collection, query=None):
        raise RuntimeError("cursor exploded")

    monkeypatch.setattr(document_store, "find", broken_find)
    client = TestClient(app, raise_server_exceptions=False)

    response = client.get("/api/orders")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
    assert "cursor exploded" not in response.text
