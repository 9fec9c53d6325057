"""SQL-backed order persistence (orders plus their ordered line items)."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional

from sqlalchemy import select

from storefront.db.models import Order, OrderLine
from storefront.db.session import get_session
from storefront.domain.ids import EntityId
from storefront.domain.records import LineItem, OrderRecord


def _to_record(entity: Order) -> OrderRecord:
    return OrderRecord(
        id=EntityId.parse(entity.id),
        status=entity.status,
        total=float(entity.total),
        customer=EntityId.parse(entity.customer_id),
        products=tuple(
            LineItem(product=EntityId.parse(line.product_id), quantity=int(line.quantity))
            for line in entity.lines
        ),
    )


def _lines(items: Iterable[LineItem]) -> list[OrderLine]:
    return [
        OrderLine(position=pos, product_id=item.product.value, quantity=item.quantity)
        for pos, item in enumerate(items)
    ]


class OrderRepository:
    def add(self, customer: EntityId, products: Iterable[LineItem], total: float, status: str) -> OrderRecord:
        now = datetime.now(timezone.utc)
        entity = Order(
            id=EntityId.new().value,
            status=status,
            total=total,
            customer_id=customer.value,
            created_at=now,
            updated_at=now,
        )
        entity.lines = _lines(products)
        with get_session() as session:
            session.add(entity)
            session.commit()
            session.refresh(entity)
            return _to_record(entity)

    def get(self, order_id: EntityId) -> Optional[OrderRecord]:
        with get_session() as session:
            entity = session.get(Order, order_id.value)
            return _to_record(entity) if entity else None

    def list(self) -> list[OrderRecord]:
        with get_session() as session:
            stmt = select(Order).order_by(Order.created_at, Order.id)
            return [_to_record(e) for e in session.execute(stmt).scalars().all()]

    def update(
        self,
        order_id: EntityId,
        *,
        products: Iterable[LineItem] | None = None,
        total: float | None = None,
        status: str | None = None,
    ) -> Optional[OrderRecord]:
        """Write the given fields only. The customer reference is never touched."""
        with get_session() as session:
            entity = session.get(Order, order_id.value)
            if not entity:
                return None
            if products is not None:
                entity.lines = _lines(products)
            if total is not None:
                entity.total = total
            if status is not None:
                entity.status = status
            entity.updated_at = datetime.now(timezone.utc)
            session.commit()
            session.refresh(entity)
            return _to_record(entity)

    def remove(self, order_id: EntityId) -> Optional[OrderRecord]:
        with get_session() as session:
            entity = session.get(Order, order_id.value)
            if not entity:
                return None
            record = _to_record(entity)
            session.delete(entity)
            session.commit()
            return record
