"""
Order engine: validation, totals and ownership rules for orders.

The engine never reaches for a global store. It receives the user lookup, the
product lookup and the order repository from whoever builds it (the app
factory in production, in-memory fakes in tests).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Iterable, Optional, Protocol

from storefront.domain.errors import ErrorKind, ServiceError
from storefront.domain.ids import EntityId, InvalidIdentifier
from storefront.domain.records import (
    ADMIN,
    ORDER_STATUSES,
    STATUS_ACTIVE,
    LineItem,
    OrderRecord,
    ProductRecord,
    UserRecord,
)

logger = logging.getLogger(__name__)

# order_lines.quantity is a 32-bit INTEGER column
MAX_QUANTITY = 2**31 - 1


class UserLookup(Protocol):
    def read(self, user_id) -> UserRecord:
        """Return the user or raise ServiceError(USER_NOT_FOUND)."""


class ProductLookup(Protocol):
    def read(self, product_id) -> ProductRecord:
        """Return the product; raise InvalidIdentifier for a malformed id and
        ServiceError(PRODUCT_NOT_FOUND) when it is absent."""


class OrderStore(Protocol):
    def add(self, customer: EntityId, products: Iterable[LineItem], total: float, status: str) -> OrderRecord: ...

    def get(self, order_id: EntityId) -> Optional[OrderRecord]: ...

    def list(self) -> list[OrderRecord]: ...

    def update(
        self,
        order_id: EntityId,
        *,
        products: Iterable[LineItem] | None = None,
        total: float | None = None,
        status: str | None = None,
    ) -> Optional[OrderRecord]: ...

    def remove(self, order_id: EntityId) -> Optional[OrderRecord]: ...


def _absent(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _quantity(raw) -> int:
    # bool is an int subclass; True must not count as quantity 1
    if isinstance(raw, bool) or not isinstance(raw, int) or not 0 < raw <= MAX_QUANTITY:
        raise ServiceError(ErrorKind.INVALID_QUANTITY, "Quantity must be a positive integer!")
    return raw


def _identity(caller) -> Optional[EntityId]:
    if caller is None:
        return None
    try:
        return EntityId.parse(caller)
    except InvalidIdentifier:
        return None


class OrderService:
    """Creates, reads, updates and deletes orders on behalf of a caller."""

    def __init__(self, users: UserLookup, products: ProductLookup, orders: OrderStore) -> None:
        self.users = users
        self.products = products
        self.orders = orders

    # -------------------------------------- helpers --------------------------------------
    def _resolve_customer(self, customer) -> EntityId:
        try:
            return self.users.read(customer).id
        except (ServiceError, InvalidIdentifier):
            raise ServiceError(ErrorKind.UNKNOWN_CUSTOMER, f"There is no customer with the given ID: {customer}")

    def _product_for_create(self, ref) -> ProductRecord:
        try:
            return self.products.read(ref)
        except InvalidIdentifier:
            raise ServiceError(ErrorKind.UNKNOWN_PRODUCT, f"Invalid product attribute: {ref!r}")
        except ServiceError as exc:
            if exc.kind is ErrorKind.PRODUCT_NOT_FOUND:
                raise ServiceError(ErrorKind.PRODUCT_NOT_FOUND, f"Non-existing product attribute: {ref}")
            raise ServiceError(ErrorKind.UNKNOWN_PRODUCT, f"Invalid product attribute: {ref!r}")

    def _product_for_update(self, ref) -> ProductRecord:
        try:
            return self.products.read(ref)
        except (InvalidIdentifier, ServiceError):
            raise ServiceError(ErrorKind.INVALID_PRODUCT, f"Invalid product attribute: {ref!r}")

    def _price_lines(self, products, resolve) -> tuple[list[LineItem], float]:
        """Validate line items in order and sum quantity x current price."""
        if not isinstance(products, list):
            raise ServiceError(ErrorKind.INVALID_PAYLOAD, "Products must be a list of line items!")
        lines: list[LineItem] = []
        total = 0.0
        for item in products:
            if not isinstance(item, Mapping):
                raise ServiceError(ErrorKind.INVALID_PAYLOAD, "Every line item must be an object!")
            quantity = _quantity(item.get("quantity"))
            product = resolve(item.get("product"))
            total += quantity * product.price
            lines.append(LineItem(product=product.id, quantity=quantity))
        # totals are money; keep whole cents
        return lines, round(total, 2)

    def _load(self, order_id) -> OrderRecord:
        try:
            oid = EntityId.parse(order_id)
        except InvalidIdentifier:
            raise ServiceError(ErrorKind.ORDER_NOT_FOUND, f"There is no order with the given ID: {order_id}")
        order = self.orders.get(oid)
        if order is None:
            raise ServiceError(ErrorKind.ORDER_NOT_FOUND, f"There is no order with the given ID: {order_id}")
        return order

    def _ensure_owner(self, order: OrderRecord, caller, action: str) -> None:
        if _identity(caller) != order.customer:
            logger.warning("order %s denied for caller=%s", action, caller)
            raise ServiceError(ErrorKind.FORBIDDEN, f"You are not authorized to {action} this order")

    # -------------------------------------- operations --------------------------------------
    def create(self, customer, products) -> OrderRecord:
        if _absent(customer) and products is None:
            raise ServiceError(ErrorKind.INVALID_PAYLOAD, "Missing payload!")
        if _absent(customer):
            raise ServiceError(ErrorKind.MISSING_CUSTOMER, "Every order must have a customer attributed to it!")
        customer_id = self._resolve_customer(customer)
        lines, total = self._price_lines(products, self._product_for_create)
        order = self.orders.add(customer_id, lines, total, STATUS_ACTIVE)
        logger.info("order created id=%s customer=%s total=%.2f", order.id, order.customer, order.total)
        return order

    def read(self, order_id, caller, role: str | None) -> OrderRecord:
        order = self._load(order_id)
        if role == ADMIN:
            return order
        self._ensure_owner(order, caller, "read")
        return order

    def read_all(self, customer=None, status: str | None = None) -> list[OrderRecord]:
        """
        List orders, optionally filtered.

        Callers must already have checked that the requester is an ADMIN or is
        filtering by their own identity. A filter value that matches nothing
        (including a malformed customer id) yields an empty list.
        """
        orders = self.orders.list()
        if customer is not None:
            wanted = _identity(customer)
            if wanted is None:
                return []
            orders = [o for o in orders if o.customer == wanted]
        if status is not None:
            needle = str(status).lower()
            orders = [o for o in orders if o.status.lower() == needle]
        return orders

    def update(self, order_id, caller, products=None, status: str | None = None) -> OrderRecord:
        order = self._load(order_id)
        self._ensure_owner(order, caller, "update")

        if products is None:
            if status not in ORDER_STATUSES:
                raise ServiceError(ErrorKind.INVALID_STATUS, f"Invalid status attribute: {status!r}")
            updated = self.orders.update(order.id, status=status)
        else:
            if status is not None and status not in ORDER_STATUSES:
                raise ServiceError(ErrorKind.INVALID_STATUS, f"Invalid status attribute: {status!r}")
            lines, total = self._price_lines(products, self._product_for_update)
            updated = self.orders.update(order.id, products=lines, total=total, status=status)

        if updated is None:
            raise ServiceError(ErrorKind.ORDER_NOT_FOUND, f"There is no order with the given ID: {order_id}")
        logger.info("order updated id=%s status=%s total=%.2f", updated.id, updated.status, updated.total)
        return updated

    def delete(self, order_id, caller) -> OrderRecord:
        order = self._load(order_id)
        self._ensure_owner(order, caller, "delete")
        removed = self.orders.remove(order.id)
        if removed is None:
            raise ServiceError(ErrorKind.ORDER_NOT_FOUND, f"There is no order with the given ID: {order_id}")
        logger.info("order deleted id=%s", removed.id)
        return removed
