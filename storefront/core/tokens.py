"""Bearer token signing and verification (PyJWT)."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional

import jwt

from storefront.core.config import get_settings
from storefront.domain.errors import ErrorKind, ServiceError


@dataclass(frozen=True)
class Caller:
    """Who is calling, as asserted by a verified token."""

    role: str
    username: Optional[str] = None
    subject: Optional[str] = None


def _secret() -> str:
    secret = get_settings().jwt_secret
    if not secret:
        raise RuntimeError("JWT_SECRET must be configured in production.")
    return secret


def create_token(
    role: str,
    username: str | None = None,
    subject: str | None = None,
    ttl_seconds: int | None = None,
) -> str:
    """Sign a token. A negative ttl yields a token that is already expired."""
    settings = get_settings()
    ttl = settings.token_ttl_seconds if ttl_seconds is None else ttl_seconds
    now = int(time.time())
    claims = {"role": role, "iat": now, "exp": now + ttl}
    if username:
        claims["username"] = username
    if subject:
        claims["sub"] = subject
    return jwt.encode(claims, _secret(), algorithm=settings.jwt_algorithm)


def decode_token(token: str | None) -> Caller:
    if not token:
        raise ServiceError(ErrorKind.UNAUTHENTICATED, "You are not authorized! Missing token.")
    settings = get_settings()
    try:
        claims = jwt.decode(token, _secret(), algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        raise ServiceError(ErrorKind.UNAUTHENTICATED, "You are not authorized! Token expired.")
    except jwt.InvalidTokenError:
        raise ServiceError(ErrorKind.UNAUTHENTICATED, "You are not authorized! Invalid token.")
    role = claims.get("role")
    if not isinstance(role, str) or not role:
        raise ServiceError(ErrorKind.UNAUTHENTICATED, "You are not authorized! Invalid token.")
    return Caller(role=role, username=claims.get("username"), subject=claims.get("sub"))
