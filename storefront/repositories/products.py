"""SQL-backed product persistence."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import delete, func, select

from storefront.db.models import Product
from storefront.db.session import get_session
from storefront.domain.ids import EntityId
from storefront.domain.records import ProductRecord


def _to_record(entity: Product) -> ProductRecord:
    return ProductRecord(id=EntityId.parse(entity.id), name=entity.name, price=float(entity.price))


class ProductRepository:
    def add(self, name: str, price: float) -> ProductRecord:
        now = datetime.now(timezone.utc)
        entity = Product(id=EntityId.new().value, name=name, price=price, created_at=now, updated_at=now)
        with get_session() as session:
            session.add(entity)
            session.commit()
            session.refresh(entity)
            return _to_record(entity)

    def get(self, product_id: EntityId) -> Optional[ProductRecord]:
        with get_session() as session:
            entity = session.get(Product, product_id.value)
            return _to_record(entity) if entity else None

    def list(self, name: str | None = None) -> list[ProductRecord]:
        with get_session() as session:
            stmt = select(Product).order_by(Product.created_at, Product.name)
            if name:
                stmt = stmt.where(func.lower(Product.name).contains(name.lower()))
            return [_to_record(e) for e in session.execute(stmt).scalars().all()]

    def update(
        self,
        product_id: EntityId,
        *,
        name: str | None = None,
        price: float | None = None,
    ) -> Optional[ProductRecord]:
        with get_session() as session:
            entity = session.get(Product, product_id.value)
            if not entity:
                return None
            if name is not None:
                entity.name = name
            if price is not None:
                entity.price = price
            entity.updated_at = datetime.now(timezone.utc)
            session.commit()
            session.refresh(entity)
            return _to_record(entity)

    def remove(self, product_id: EntityId) -> Optional[ProductRecord]:
        with get_session() as session:
            entity = session.get(Product, product_id.value)
            if not entity:
                return None
            record = _to_record(entity)
            session.execute(delete(Product).where(Product.id == product_id.value))
            session.commit()
            return record
