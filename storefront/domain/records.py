"""Immutable records handed out by repositories and services."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .ids import EntityId

CUSTOMER = "CUSTOMER"
ADMIN = "ADMIN"
ROLES = (CUSTOMER, ADMIN)

STATUS_ACTIVE = "ACTIVE"
STATUS_COMPLETE = "COMPLETE"
ORDER_STATUSES = (STATUS_ACTIVE, STATUS_COMPLETE)


@dataclass(frozen=True)
class UserRecord:
    id: EntityId
    username: str
    role: str
    password_hash: str = ""

    def to_dict(self) -> dict:
        # password_hash is never serialized
        return {"id": str(self.id), "username": self.username, "role": self.role}


@dataclass(frozen=True)
class ProductRecord:
    id: EntityId
    name: str
    price: float

    def to_dict(self) -> dict:
        return {"id": str(self.id), "name": self.name, "price": self.price}


@dataclass(frozen=True)
class LineItem:
    product: EntityId
    quantity: int

    def to_dict(self) -> dict:
        return {"product": str(self.product), "quantity": self.quantity}


@dataclass(frozen=True)
class OrderRecord:
    id: EntityId
    status: str
    total: float
    customer: EntityId
    products: Tuple[LineItem, ...]

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "status": self.status,
            "total": self.total,
            "customer": str(self.customer),
            "products": [line.to_dict() for line in self.products],
        }
