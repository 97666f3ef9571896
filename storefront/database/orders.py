"""Order storage"""

from typing import Any, Optional

from .store import DocumentStore

COLLECTION = "order"


class OrderDatabase:
    """Orders backed by a document store"""

    def __init__(self, store: DocumentStore):
        self.store = store

    def create_order(self, order: dict[str, Any], idempotency_key: Optional[str] = None) -> dict[str, Any]:
        """Persist an order exactly as submitted"""
        document = dict(order)
        if idempotency_key:
            document["idempotencyKey"] = idempotency_key
        return self.store.insert_one(COLLECTION, document)

    def find_by_idempotency_key(self, idempotency_key: str) -> Optional[dict[str, Any]]:
        """Get the order previously created with this key"""
        return self.store.find_one(COLLECTION, {"idempotencyKey": idempotency_key})

    def get_order(self, order_id: str) -> Optional[dict[str, Any]]:
        """Get an order by ID"""
        return self.store.find_one(COLLECTION, {"_id": order_id})

    def list_orders(self, limit: int = 50) -> list[dict[str, Any]]:
        """List recent orders"""
        orders = self.store.find(COLLECTION)
        orders.sort(key=lambda o: o.get("orderDate") or "", reverse=True)
        return orders[:limit]
