"""
Storefront API Client

HTTP client for the storefront's product and order endpoints.
"""

import logging
from typing import Any, Optional

import httpx

from ..core.config import Settings, get_settings

logger = logging.getLogger(__name__)


class StoreClient:
    """Client for interacting with the storefront API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize store client.

        Args:
            base_url: Base URL of the storefront API
            timeout: Request timeout in seconds
            transport: Optional httpx transport (ASGI app, mock handler)
        """
        self.base_url = base_url.rstrip("/")
        self._http_client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "StoreClient":
        """Create a client for the configured storefront"""
        settings = settings or get_settings()
        return cls(base_url=settings.store_base_url, timeout=settings.request_timeout)

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    async def __aenter__(self) -> "StoreClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[Any] = None,
    ) -> Any:
        """Make an HTTP request and decode the JSON response"""
        response = await self._http_client.request(method, path, json=body)

        if response.status_code >= 400:
            logger.error(f"Request failed: {response.status_code} - {response.text}")
            response.raise_for_status()

        return response.json()

    # ==================== Product APIs ====================

    async def list_products(self) -> list[dict]:
        """Get every product in the catalog"""
        return await self._request("GET", "/api/products")

    async def create_product(self, product: dict) -> dict:
        """Add a product to the catalog"""
        return await self._request("POST", "/api/admin/products", body=product)

    # ==================== Order APIs ====================

    async def place_order(
        self,
        payload: dict,
        idempotency_key: Optional[str] = None,
    ) -> httpx.Response:
        """
        Submit an order.

        The raw response is returned so the caller can decide how to read
        it; failures are not raised here.
        """
        headers = {"Content-Type": "application/json"}
        if idempotency_key:
            headers["Idempotency-Key"] = idempotency_key

        logger.debug(f"Placing order for {payload.get('totalAmount')}")
        return await self._http_client.post("/api/orders/place", json=payload, headers=headers)

    async def list_orders(self, limit: int = 50) -> list[dict]:
        """List recent orders"""
        return await self._request("GET", f"/api/orders?limit={limit}")
