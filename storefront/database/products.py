"""Product catalog storage"""

import logging
from typing import Any, Optional

from .store import DocumentStore

logger = logging.getLogger(__name__)

COLLECTION = "product"

# Demo catalog used to seed an empty store
DEMO_PRODUCTS: list[dict[str, Any]] = [
    {
        "_id": "prod-001",
        "name": "Wireless Headphones",
        "description": "Noise cancelling over-ear headphones with 30-hour battery life.",
        "price": 2999,
        "category": "Electronics",
        "image": "/images/headphones.jpg",
        "stock": 50,
    },
    {
        "_id": "prod-002",
        "name": "Cotton T-Shirt",
        "description": "Classic crew neck t-shirt in organic cotton.",
        "price": 499,
        "category": "Clothing",
        "image": "/images/tshirt.jpg",
        "stock": 200,
    },
    {
        "_id": "prod-003",
        "name": "Ceramic Coffee Mug",
        "description": "Stoneware mug, 350 ml, dishwasher safe.",
        "price": 299,
        "category": "Home",
        "image": "/images/mug.jpg",
        "stock": 120,
    },
    {
        "_id": "prod-004",
        "name": "Yoga Mat",
        "description": "6 mm non-slip mat with carry strap.",
        "price": 899,
        "category": "Sports",
        "image": "/images/yoga-mat.jpg",
        "stock": 75,
    },
    {
        "_id": "prod-005",
        "name": "Atomic Habits",
        "description": "An Easy & Proven Way to Build Good Habits & Break Bad Ones. Paperback.",
        "price": 399,
        "category": "Books",
        "image": "/images/atomic-habits.jpg",
        "stock": 300,
    },
]


class ProductDatabase:
    """Product catalog backed by a document store"""

    def __init__(self, store: DocumentStore):
        self.store = store

    def get_all_products(self) -> list[dict[str, Any]]:
        """Get all products"""
        return self.store.find(COLLECTION)

    def get_product(self, product_id: str) -> Optional[dict[str, Any]]:
        """Get a product by ID"""
        return self.store.find_one(COLLECTION, {"_id": product_id})

    def create_product(self, product: dict[str, Any]) -> dict[str, Any]:
        """Store a new product record as submitted"""
        return self.store.insert_one(COLLECTION, product)

    def seed(self, products: list[dict[str, Any]] = DEMO_PRODUCTS) -> int:
        """
        Insert the demo catalog if the collection is empty.

        Returns:
            Number of products inserted
        """
        if self.store.count(COLLECTION) > 0:
            return 0
        for product in products:
            self.store.insert_one(COLLECTION, product)
        logger.info(f"Seeded {len(products)} demo products")
        return len(products)
