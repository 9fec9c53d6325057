"""
Access layer: turns the Authorization header into a Caller.

Used as FastAPI dependencies so that every protected route rejects missing,
malformed or expired credentials before the handler body runs.
"""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import Request

from storefront.core.tokens import Caller, decode_token
from storefront.domain.errors import ErrorKind, ServiceError
from storefront.domain.ids import EntityId
from storefront.domain.records import ADMIN

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


def bearer_token(request: Request) -> Optional[str]:
    header = request.headers.get("authorization") or ""
    if not header.lower().startswith(BEARER_PREFIX):
        return None
    return header[len(BEARER_PREFIX):].strip() or None


def current_caller(request: Request) -> Caller:
    caller = decode_token(bearer_token(request))
    request.state.caller = caller
    return caller


def require_admin(request: Request) -> Caller:
    caller = current_caller(request)
    if caller.role != ADMIN:
        logger.warning("admin route %s denied for role=%s", request.url.path, caller.role)
        raise ServiceError(ErrorKind.FORBIDDEN, "You are not authorized to perform this action")
    return caller


def resolve_identity(caller: Caller, users) -> Optional[EntityId]:
    """Map the caller to a stored user id, or None when the token names no live user."""
    if not caller.username:
        return None
    matches = users.read_one(caller.username)
    return matches[0].id if matches else None


def is_self(caller: Caller, username: str) -> bool:
    return bool(caller.username) and caller.username == username
