# Storefront Models

from .order import (
    Order,
    OrderContact,
    OrderLine,
    OrderPayload,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
)
from .common import ErrorResponse, HealthResponse

__all__ = [
    "Order",
    "OrderContact",
    "OrderLine",
    "OrderPayload",
    "OrderStatus",
    "PaymentMethod",
    "PaymentStatus",
    "ErrorResponse",
    "HealthResponse",
]
