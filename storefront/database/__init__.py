# Database modules

from fastapi import Depends

from .connection import get_store, close_store
from .orders import OrderDatabase
from .products import ProductDatabase, DEMO_PRODUCTS
from .store import DocumentStore, MemoryDocumentStore, MongoDocumentStore, PersistenceError


def get_product_db(store: DocumentStore = Depends(get_store)) -> ProductDatabase:
    """Product catalog on the shared store"""
    return ProductDatabase(store)


def get_order_db(store: DocumentStore = Depends(get_store)) -> OrderDatabase:
    """Order storage on the shared store"""
    return OrderDatabase(store)


__all__ = [
    "get_store",
    "close_store",
    "get_product_db",
    "get_order_db",
    "ProductDatabase",
    "OrderDatabase",
    "DEMO_PRODUCTS",
    "DocumentStore",
    "MemoryDocumentStore",
    "MongoDocumentStore",
    "PersistenceError",
]
