"""
Persistence adapters.

Each repository wraps the SQLAlchemy session for one resource and hands out
immutable domain records. Absent rows come back as None; turning absence into
a domain error is the job of the services.
"""

from .orders import OrderRepository
from .products import ProductRepository
from .users import UserRepository

__all__ = ["OrderRepository", "ProductRepository", "UserRepository"]
