from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Request

from storefront.core.tokens import Caller
from storefront.domain.errors import ErrorKind, ServiceError
from storefront.domain.records import ADMIN
from storefront.routers.common import blank_to_none, body_of, get_service
from storefront.services.access_service import current_caller, is_self, require_admin

router = APIRouter(prefix="/api/users", tags=["users"])

_NOT_ALLOWED = "You are not authorized to perform this action"


def _users(request: Request):
    return get_service(request, "user_service")


def _ensure_self_or_admin(caller: Caller, username: str) -> None:
    if caller.role != ADMIN and not is_self(caller, username):
        raise ServiceError(ErrorKind.FORBIDDEN, _NOT_ALLOWED)


@router.get("")
def list_users(
    request: Request,
    username: Optional[str] = None,
    role: Optional[str] = None,
    caller: Caller = Depends(require_admin),
):
    if username and role:
        raise ServiceError(
            ErrorKind.INVALID_PAYLOAD,
            "You must query the database based on either a username or user role.",
        )
    users = _users(request)
    data = users.read_one(username) if username else users.read_all(role)
    return {"data": [u.to_dict() for u in data]}


@router.get("/{user_id}")
def read_user(user_id: str, request: Request, caller: Caller = Depends(current_caller)):
    user = _users(request).read(user_id)
    _ensure_self_or_admin(caller, user.username)
    return {"data": user.to_dict()}


@router.post("", status_code=201)
def create_user(request: Request, payload: Any = Body(None), caller: Caller = Depends(require_admin)):
    body = body_of(payload)
    user = _users(request).create(body.get("username"), body.get("password"), body.get("role"))
    return {"data": user.to_dict()}


@router.delete("/{user_id}")
def delete_user(user_id: str, request: Request, caller: Caller = Depends(current_caller)):
    users = _users(request)
    if caller.role != ADMIN:
        _ensure_self_or_admin(caller, users.read(user_id).username)
    return {"data": users.delete(user_id).to_dict()}


@router.put("/{user_id}")
def update_user(
    user_id: str,
    request: Request,
    payload: Any = Body(None),
    caller: Caller = Depends(current_caller),
):
    body = body_of(payload)
    password = blank_to_none(body.get("password"))
    role = blank_to_none(body.get("role"))
    if password is None and role is None:
        raise ServiceError(ErrorKind.INVALID_PAYLOAD, "You must provide at least one user attribute!")
    if caller.role != ADMIN and role == ADMIN:
        raise ServiceError(ErrorKind.FORBIDDEN, _NOT_ALLOWED)
    users = _users(request)
    if caller.role != ADMIN:
        _ensure_self_or_admin(caller, users.read(user_id).username)
    return {"data": users.update(user_id, password=password, role=role).to_dict()}
