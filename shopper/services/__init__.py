# Shopper services

from .checkout import CheckoutFlow, CheckoutError
from .inventory import AdminInventory
from .store_client import StoreClient
from .validation import ValidationResult, validate_cart, validate_cart_item

__all__ = [
    "CheckoutFlow",
    "CheckoutError",
    "AdminInventory",
    "StoreClient",
    "ValidationResult",
    "validate_cart",
    "validate_cart_item",
]
