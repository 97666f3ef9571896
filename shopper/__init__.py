"""Shopper client: checkout flow, client-held state and admin inventory."""

__version__ = "1.0.0"
