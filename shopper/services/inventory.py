"""Admin inventory kept in the client-side product mirror"""

import logging
from typing import Any, Optional

from ..core.state import PRODUCTS_KEY, ClientStateStore
from .store_client import StoreClient

logger = logging.getLogger(__name__)


class AdminInventory:
    """
    Product list managed from the admin panel.

    The list lives under the ``products`` key. It is seeded from the
    storefront catalog the first time and is independent of server state
    afterwards; every change is written straight back to the mirror.
    """

    def __init__(self, state: ClientStateStore, client: Optional[StoreClient] = None):
        self.state = state
        self.client = client
        self.products: list[dict[str, Any]] = []

    async def load(self) -> list[dict[str, Any]]:
        """Read the mirror, seeding it from the catalog when absent"""
        try:
            stored = self.state.read_json(PRODUCTS_KEY)
        except ValueError:
            stored = "unparseable"
        if isinstance(stored, list):
            self.products = stored
            return self.products

        if stored is not None:
            logger.warning("Stored product mirror is not a list, reseeding")
        if self.client is None:
            self.products = []
        else:
            catalog = await self.client.list_products()
            self.products = [_with_id(product) for product in catalog]
            logger.info(f"Seeded product mirror with {len(self.products)} products")
        self._save()
        return self.products

    def search(self, query: str) -> list[dict[str, Any]]:
        """Products whose name or category contains ``query``, ignoring case"""
        needle = query.lower()
        return [
            product for product in self.products
            if needle in str(product.get("name", "")).lower()
            or needle in str(product.get("category", "")).lower()
        ]

    def get_product(self, product_id: str) -> Optional[dict[str, Any]]:
        return next((p for p in self.products if p.get("id") == product_id), None)

    def update_stock(self, product_id: str, new_stock: int) -> bool:
        """
        Set a product's stock level.

        Returns:
            False if the level is negative or the product is unknown
        """
        if new_stock < 0:
            return False
        product = self.get_product(product_id)
        if product is None:
            return False

        self.products = [
            {**p, "stock": new_stock} if p.get("id") == product_id else p
            for p in self.products
        ]
        self._save()
        return True

    def edit_product(self, product: dict[str, Any]) -> bool:
        """Replace the product with the same ``id``"""
        product_id = product.get("id")
        if self.get_product(product_id) is None:
            return False
        self.products = [dict(product) if p.get("id") == product_id else p for p in self.products]
        self._save()
        return True

    def delete_product(self, product_id: str) -> bool:
        remaining = [p for p in self.products if p.get("id") != product_id]
        if len(remaining) == len(self.products):
            return False
        self.products = remaining
        self._save()
        return True

    def _save(self) -> None:
        self.state.write_json(PRODUCTS_KEY, self.products)


def _with_id(product: dict[str, Any]) -> dict[str, Any]:
    if "id" not in product and "_id" in product:
        return {**product, "id": product["_id"]}
    return dict(product)
