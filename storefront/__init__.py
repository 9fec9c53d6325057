"""Storefront REST backend (users, products, orders)."""

__version__ = "0.1.0"
