"""Shared test fixtures."""
import json
from unittest.mock import MagicMock

import bson
import httpx
import pytest
from fastapi.testclient import TestClient

from shopper.core.state import CART_KEY, USER_KEY, ClientStateStore
from shopper.services.store_client import StoreClient
from storefront.database import MemoryDocumentStore, MongoDocumentStore, ProductDatabase, get_store
from storefront.main import app

WIDGET = {"_id": "p1", "name": "Widget", "price": 100, "category": "Tools", "stock": 10}
GADGET = {"_id": "p2", "name": "Gadget", "price": 25.5, "category": "Electronics", "stock": 3}


@pytest.fixture
def document_store():
    """In-memory document store holding a two-product catalog."""
    store = MemoryDocumentStore()
    ProductDatabase(store).seed([WIDGET, GADGET])
    return store


@pytest.fixture
def api(document_store):
    """TestClient for the storefront app wired to the in-memory store."""
    app.dependency_overrides[get_store] = lambda: document_store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def asgi_store_client(api):
    """StoreClient that talks to the storefront app in-process."""
    return StoreClient(base_url="http://testserver", transport=httpx.ASGITransport(app=app))


@pytest.fixture
def sample_profile():
    return {"username": "Ann", "email": "a@x.com", "phone": "555", "address": "Main St", "role": "customer"}


@pytest.fixture
def sample_cart():
    return [{"id": "p1", "name": "Widget", "price": 100, "quantity": 2}]


@pytest.fixture
def client_state(sample_profile, sample_cart):
    """Client state with a signed-in profile and a one-line cart."""
    state = ClientStateStore()
    state.set_item(USER_KEY, json.dumps(sample_profile))
    state.set_item(CART_KEY, json.dumps(sample_cart))
    return state


@pytest.fixture
def order_payload():
    """Wire-format order for the sample cart."""
    return {
        "user": {"name": "Ann", "email": "a@x.com", "address": "Main St", "phone": "555"},
        "products": [{"productId": "p1", "name": "Widget", "price": 100, "quantity": 2}],
        "totalAmount": 200,
        "status": "pending",
        "orderDate": "2026-10-18T09:30:00+00:00",
        "paymentMethod": "cod",
        "paymentStatus": "pending",
    }


@pytest.fixture
def mongo_store():
    """MongoDB store without a server; inserts BSON-encode the document as the driver does."""
    store = MongoDocumentStore("mongodb://db.invalid:27017", "shop")
    store._client = MagicMock()

    def insert_one(document):
        bson.encode(document)
        return MagicMock(inserted_id=bson.ObjectId())

    collection = store._client["shop"]["order"]
    collection.insert_one.side_effect = insert_one
    collection.find_one.return_value = None
    return store


@pytest.fixture
def mongo_api(mongo_store):
    """TestClient for the storefront app wired to ``mongo_store``."""
    app.dependency_overrides[get_store] = lambda: mongo_store
    yield TestClient(app)
    app.dependency_overrides.clear()
