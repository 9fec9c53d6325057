#!/usr/bin/env python3
"""
Create an account directly through the user store (e.g. the first admin).

Usage:
  python scripts/create_user.py --username admin --password s3cret [--role ADMIN]
"""
from __future__ import annotations

import argparse
import sys

from storefront.db.create_tables import create_all
from storefront.domain.errors import ServiceError
from storefront.domain.records import ROLES
from storefront.services.user_service import UserService


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Create a storefront user")
    ap.add_argument("--username", required=True, help="Unique username")
    ap.add_argument("--password", required=True, help="Plain-text password (hashed before storing)")
    ap.add_argument("--role", default="ADMIN", choices=ROLES, help="Role (default: ADMIN)")
    ap.add_argument("--create-tables", action="store_true", help="Create the schema first")
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.create_tables:
        create_all()
    try:
        user = UserService().create(args.username, args.password, args.role)
    except ServiceError as exc:
        sys.stderr.write(f"Error: {exc.message}\n")
        return 1
    print("OK: user created")
    print(f"  ID: {user.id}")
    print(f"  Username: {user.username}")
    print(f"  Role: {user.role}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
