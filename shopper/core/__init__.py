# Core modules

from .config import settings, get_settings, Settings
from .state import ClientStateStore, CART_KEY, USER_KEY, PRODUCTS_KEY

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "ClientStateStore",
    "CART_KEY",
    "USER_KEY",
    "PRODUCTS_KEY",
]
