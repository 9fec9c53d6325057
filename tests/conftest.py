from __future__ import annotations

import dataclasses
import sys
from pathlib import Path
from typing import Optional

import pytest

# make the package importable when running the tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from storefront.core import config as core_config  # noqa: E402
from storefront.core.tokens import create_token  # noqa: E402
from storefront.db import create_tables  # noqa: E402
from storefront.db import session as db_session  # noqa: E402
from storefront.domain.errors import ErrorKind, ServiceError  # noqa: E402
from storefront.domain.ids import EntityId  # noqa: E402
from storefront.domain.records import CUSTOMER, OrderRecord, ProductRecord, UserRecord  # noqa: E402
from storefront.services.order_service import OrderService  # noqa: E402


@pytest.fixture()
def db_env(tmp_path, monkeypatch):
    """Point the app at a temporary SQLite file and reset settings/engine caches."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    monkeypatch.delenv("APP_ENV", raising=False)
    monkeypatch.delenv("JWT_SECRET", raising=False)
    core_config.get_settings.cache_clear()
    db_session.reset_caches()

    create_tables.drop_all()
    create_tables.create_all()

    yield db_file

    create_tables.drop_all()
    db_session.reset_caches()
    core_config.get_settings.cache_clear()


@pytest.fixture()
def app(db_env):
    from storefront.app import create_app

    return create_app()


@pytest.fixture()
def client(app):
    from fastapi.testclient import TestClient

    with TestClient(app) as test_client:
        yield test_client


def token_for(user: UserRecord, ttl_seconds: int | None = None) -> str:
    return create_token(role=user.role, username=user.username, subject=str(user.id), ttl_seconds=ttl_seconds)


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


# ---------------------------------------------------------------------------
# In-memory collaborators for the order engine
# ---------------------------------------------------------------------------


class FakeUsers:
    def __init__(self) -> None:
        self.rows: dict[EntityId, UserRecord] = {}

    def add(self, username: str, role: str = CUSTOMER) -> UserRecord:
        user = UserRecord(id=EntityId.new(), username=username, role=role)
        self.rows[user.id] = user
        return user

    def read(self, user_id) -> UserRecord:
        try:
            uid = EntityId.parse(user_id)
        except ValueError:
            raise ServiceError(ErrorKind.USER_NOT_FOUND, "no such user")
        if uid not in self.rows:
            raise ServiceError(ErrorKind.USER_NOT_FOUND, "no such user")
        return self.rows[uid]


class FakeProducts:
    def __init__(self) -> None:
        self.rows: dict[EntityId, ProductRecord] = {}

    def add(self, name: str, price: float) -> ProductRecord:
        product = ProductRecord(id=EntityId.new(), name=name, price=price)
        self.rows[product.id] = product
        return product

    def set_price(self, product: ProductRecord, price: float) -> ProductRecord:
        updated = dataclasses.replace(product, price=price)
        self.rows[product.id] = updated
        return updated

    def read(self, product_id) -> ProductRecord:
        pid = EntityId.parse(product_id)
        if pid not in self.rows:
            raise ServiceError(ErrorKind.PRODUCT_NOT_FOUND, "no such product")
        return self.rows[pid]


class FakeOrders:
    def __init__(self) -> None:
        self.rows: dict[EntityId, OrderRecord] = {}
        self.writes = 0

    def add(self, customer, products, total, status) -> OrderRecord:
        order = OrderRecord(id=EntityId.new(), status=status, total=total, customer=customer, products=tuple(products))
        self.rows[order.id] = order
        self.writes += 1
        return order

    def get(self, order_id) -> Optional[OrderRecord]:
        return self.rows.get(order_id)

    def list(self):
        return list(self.rows.values())

    def update(self, order_id, *, products=None, total=None, status=None) -> Optional[OrderRecord]:
        order = self.rows.get(order_id)
        if order is None:
            return None
        changes = {}
        if products is not None:
            changes["products"] = tuple(products)
        if total is not None:
            changes["total"] = total
        if status is not None:
            changes["status"] = status
        order = dataclasses.replace(order, **changes)
        self.rows[order_id] = order
        self.writes += 1
        return order

    def remove(self, order_id) -> Optional[OrderRecord]:
        self.writes += 1
        return self.rows.pop(order_id, None)


@pytest.fixture()
def fake_users():
    return FakeUsers()


@pytest.fixture()
def fake_products():
    return FakeProducts()


@pytest.fixture()
def fake_orders():
    return FakeOrders()


@pytest.fixture()
def order_service(fake_users, fake_products, fake_orders):
    return OrderService(fake_users, fake_products, fake_orders)
