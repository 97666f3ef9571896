"""Order API routes for the storefront"""

import logging
import math
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query
from fastapi.responses import JSONResponse

from ..core.config import Settings, get_settings
from ..database import OrderDatabase, ProductDatabase, PersistenceError, get_order_db, get_product_db
from ..models.common import ErrorResponse
from ..models.order import Order, OrderPayload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/orders", tags=["Orders"])


def verify_order_total(payload: OrderPayload, products: Optional[ProductDatabase] = None) -> None:
    """
    Check that the order's total is backed by its line items.

    With a product catalog, every line must also reference a known product
    at its current catalog price.

    Raises:
        HTTPException: 400 describing the first violation found
    """
    if products is not None:
        for line in payload.products:
            product = products.get_product(line.product_id)
            if product is None:
                raise HTTPException(status_code=400, detail=f"Unknown product: {line.product_id}")
            catalog_price = product.get("price")
            if not isinstance(catalog_price, (int, float)) or not math.isclose(catalog_price, line.price):
                raise HTTPException(status_code=400, detail=f"Price mismatch for {line.name}")

    expected = sum(line.price * line.quantity for line in payload.products)
    if not math.isclose(expected, payload.total_amount, abs_tol=1e-6):
        raise HTTPException(status_code=400, detail="Order total does not match line items")


@router.post(
    "/place",
    response_model=Order,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def place_order(
    payload: OrderPayload,
    idempotency_key: Optional[str] = Header(None),
    orders: OrderDatabase = Depends(get_order_db),
    products: ProductDatabase = Depends(get_product_db),
    settings: Settings = Depends(get_settings),
):
    """
    Place an order.

    Requests carrying an Idempotency-Key that was already used return the
    order created by the first request instead of creating another one.
    """
    try:
        if idempotency_key:
            existing = orders.find_by_idempotency_key(idempotency_key)
            if existing:
                logger.info(f"Replayed order {existing['_id']} for idempotency key {idempotency_key}")
                return existing

        verify_order_total(payload, products if settings.verify_order_prices else None)

        order = orders.create_order(
            payload.model_dump(mode="json", by_alias=True),
            idempotency_key=idempotency_key,
        )
    except PersistenceError:
        logger.exception("Error placing order")
        return JSONResponse(status_code=500, content={"error": "Failed to place order"})

    logger.info(
        f"Order {order['_id']} created: {payload.total_amount} - "
        f"{len(payload.products)} line(s), payment={payload.payment_method.value}"
    )
    return order


@router.get("", response_model=list[Order], responses={500: {"model": ErrorResponse}})
def list_orders(
    limit: int = Query(50, ge=1, le=500),
    orders: OrderDatabase = Depends(get_order_db),
):
    """List recent orders, newest first"""
    try:
        return orders.list_orders(limit=limit)
    except PersistenceError:
        logger.exception("Error fetching orders")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch orders"})
