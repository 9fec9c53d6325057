"""Product store: catalogue CRUD with price validation."""

from __future__ import annotations

import logging
import math

from storefront.domain.errors import ErrorKind, ServiceError
from storefront.domain.ids import EntityId
from storefront.domain.records import ProductRecord
from storefront.repositories.products import ProductRepository

logger = logging.getLogger(__name__)


def _validate_name(name) -> str:
    value = name.strip() if isinstance(name, str) else ""
    if not value:
        raise ServiceError(ErrorKind.INVALID_ATTRIBUTE, "Every product must have a name!")
    return value


def _validate_price(price) -> float:
    if isinstance(price, bool) or not isinstance(price, (int, float)):
        raise ServiceError(ErrorKind.INVALID_ATTRIBUTE, "Price must be a number!")
    if math.isnan(price) or math.isinf(price) or price < 0:
        raise ServiceError(ErrorKind.INVALID_ATTRIBUTE, "Price must be a non-negative number!")
    return float(price)


class ProductService:
    def __init__(self, repository: ProductRepository | None = None) -> None:
        self.repository = repository or ProductRepository()

    def create(self, name, price) -> ProductRecord:
        product = self.repository.add(_validate_name(name), _validate_price(price))
        logger.info("product created id=%s price=%s", product.id, product.price)
        return product

    def read(self, product_id) -> ProductRecord:
        """
        Look up one product.

        A malformed id raises InvalidIdentifier (not a ServiceError) so callers
        can tell a badly shaped reference apart from one that is simply absent.
        """
        pid = EntityId.parse(product_id)
        product = self.repository.get(pid)
        if not product:
            raise ServiceError(ErrorKind.PRODUCT_NOT_FOUND, f"There is no product with the given ID: {product_id}")
        return product

    def read_all(self, name: str | None = None) -> list[ProductRecord]:
        return self.repository.list((name or "").strip() or None)

    def update(self, product_id, name=None, price=None) -> ProductRecord:
        pid = EntityId.parse(product_id)
        product = self.repository.update(
            pid,
            name=_validate_name(name) if name is not None else None,
            price=_validate_price(price) if price is not None else None,
        )
        if not product:
            raise ServiceError(ErrorKind.PRODUCT_NOT_FOUND, f"There is no product with the given ID: {product_id}")
        logger.info("product updated id=%s", product.id)
        return product

    def delete(self, product_id) -> ProductRecord:
        pid = EntityId.parse(product_id)
        product = self.repository.remove(pid)
        if not product:
            raise ServiceError(ErrorKind.PRODUCT_NOT_FOUND, f"There is no product with the given ID: {product_id}")
        logger.info("product deleted id=%s", product.id)
        return product
