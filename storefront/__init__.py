"""Storefront API: product catalog, admin product management and order placement."""

__version__ = "1.0.0"
