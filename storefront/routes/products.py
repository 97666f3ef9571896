"""Product API routes for the storefront"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from ..database import ProductDatabase, PersistenceError, get_product_db
from ..models.common import ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["Products"])
admin_router = APIRouter(prefix="/api/admin/products", tags=["Admin"])


def _fetch_all(products: ProductDatabase):
    try:
        catalog = products.get_all_products()
    except PersistenceError:
        logger.exception("Error fetching products")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch products"})
    logger.info(f"Found {len(catalog)} products")
    return catalog


@router.get("", response_model=list[dict[str, Any]], responses={500: {"model": ErrorResponse}})
def list_products(products: ProductDatabase = Depends(get_product_db)):
    """List every product in the catalog"""
    return _fetch_all(products)


@admin_router.get("", response_model=list[dict[str, Any]], responses={500: {"model": ErrorResponse}})
def admin_list_products(products: ProductDatabase = Depends(get_product_db)):
    """List every product in the catalog for inventory management"""
    return _fetch_all(products)


@admin_router.post("", response_model=dict[str, Any], responses={500: {"model": ErrorResponse}})
def create_product(
    product: dict[str, Any] = Body(...),
    products: ProductDatabase = Depends(get_product_db),
):
    """
    Add a product to the catalog.

    The record is stored as submitted; the only schema enforced is the one
    the document store itself imposes.
    """
    product.pop("_id", None)
    try:
        created = products.create_product(product)
    except PersistenceError:
        logger.exception("Error adding product")
        return JSONResponse(status_code=500, content={"error": "Failed to add product"})
    logger.info(f"Product {created['_id']} created")
    return created
