from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Request

from storefront.core.config import get_settings
from storefront.core.rate_limiter import rate_limit_ip
from storefront.core.tokens import create_token
from storefront.domain.errors import ErrorKind, ServiceError
from storefront.domain.records import CUSTOMER
from storefront.routers.common import body_of, get_service

router = APIRouter(tags=["auth"])
logger = logging.getLogger(__name__)


def _rate_limit(request: Request, scope: str) -> None:
    settings = get_settings()
    rate_limit_ip(
        request,
        scope,
        limit=settings.auth_rate_limit,
        window_seconds=settings.auth_rate_window_seconds,
    )


@router.post("/authenticate")
def authenticate(request: Request, payload: Any = Body(None)):
    _rate_limit(request, "auth:authenticate")
    body = body_of(payload)
    users = get_service(request, "user_service")
    user = users.verify_credentials(body.get("username"), body.get("password"))
    if not user:
        logger.warning("failed login for username=%r", body.get("username"))
        raise ServiceError(ErrorKind.UNAUTHENTICATED, "Wrong username or password!")
    token = create_token(role=user.role, username=user.username, subject=str(user.id))
    return {"token": token}


@router.post("/register", status_code=201)
def register(request: Request, payload: Any = Body(None)):
    _rate_limit(request, "auth:register")
    body = body_of(payload)
    users = get_service(request, "user_service")
    user = users.create(body.get("username"), body.get("password"), CUSTOMER)
    return {"data": user.to_dict()}
