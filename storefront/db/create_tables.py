"""
Create (or rebuild) the storefront schema.

Usage:
  python -m storefront.db.create_tables [--drop]
"""
from __future__ import annotations

import argparse
import logging

from sqlalchemy.exc import SQLAlchemyError

from .session import Base, get_engine
from . import models  # noqa: F401  # registers users/products/orders/order_lines on Base.metadata

logger = logging.getLogger(__name__)


def create_all() -> list[str]:
    """Create missing tables and return the names of every table in the schema."""
    Base.metadata.create_all(bind=get_engine())
    tables = sorted(Base.metadata.tables)
    logger.info("schema ready tables=%s", ",".join(tables))
    return tables


def drop_all() -> None:
    Base.metadata.drop_all(bind=get_engine())
    logger.warning("schema dropped")


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Create the storefront database tables")
    ap.add_argument("--drop", action="store_true", help="Drop every table first (destroys all data)")
    args = ap.parse_args(argv)
    try:
        if args.drop:
            drop_all()
        tables = create_all()
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
    print(f"Tables ready: {', '.join(tables)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
