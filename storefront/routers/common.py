"""Small helpers shared by the routers."""
from __future__ import annotations

from fastapi import Request

from storefront.domain.errors import ErrorKind, ServiceError


def get_service(request: Request, name: str):
    svc = getattr(getattr(request.app, "state", None), name, None)
    if svc is None:
        raise RuntimeError(f"{name} is not configured")
    return svc


def body_of(payload) -> dict:
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ServiceError(ErrorKind.INVALID_PAYLOAD, "Request body must be a JSON object!")
    return payload


def blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value
