# Shopper Models

from .cart import CartItem, ShippingDetails, cart_total
from .order import (
    OrderContact,
    OrderLine,
    OrderPayload,
    PaymentMethod,
    PaymentStatus,
    payment_status_for,
)

__all__ = [
    "CartItem",
    "ShippingDetails",
    "cart_total",
    "OrderContact",
    "OrderLine",
    "OrderPayload",
    "PaymentMethod",
    "PaymentStatus",
    "payment_status_for",
]
