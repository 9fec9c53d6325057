"""
Use cases for the storefront API.

Routers call these services instead of touching repositories or the database
session directly. The order engine receives its collaborators explicitly so
that tests can hand it in-memory fakes.
"""

from .order_service import OrderService
from .product_service import ProductService
from .user_service import UserService

__all__ = ["OrderService", "ProductService", "UserService"]
