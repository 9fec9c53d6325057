from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Request

from storefront.core.tokens import Caller
from storefront.domain.errors import ErrorKind, ServiceError
from storefront.domain.records import ADMIN
from storefront.routers.common import blank_to_none, body_of, get_service
from storefront.services.access_service import current_caller, is_self, resolve_identity

router = APIRouter(prefix="/api/orders", tags=["orders"])


def _orders(request: Request):
    return get_service(request, "order_service")


def _users(request: Request):
    return get_service(request, "user_service")


@router.get("")
def list_orders(
    request: Request,
    customer: Optional[str] = None,
    status: Optional[str] = None,
    caller: Caller = Depends(current_caller),
):
    if caller.role != ADMIN:
        # customers may only list their own orders, so the filter is mandatory
        if customer is None:
            raise ServiceError(ErrorKind.FORBIDDEN, "You are not authorized to perform this action")
        try:
            target = _users(request).read(customer)
        except ServiceError:
            return {"data": []}
        if not is_self(caller, target.username):
            raise ServiceError(ErrorKind.FORBIDDEN, "You are not authorized to perform this action")
    orders = _orders(request).read_all(customer=customer, status=status)
    return {"data": [o.to_dict() for o in orders]}


@router.get("/{order_id}")
def read_order(order_id: str, request: Request, caller: Caller = Depends(current_caller)):
    identity = resolve_identity(caller, _users(request))
    order = _orders(request).read(order_id, identity, caller.role)
    return {"data": order.to_dict()}


@router.post("", status_code=201)
def create_order(request: Request, payload: Any = Body(None), caller: Caller = Depends(current_caller)):
    body = body_of(payload)
    order = _orders(request).create(body.get("customer"), body.get("products"))
    return {"data": order.to_dict()}


@router.put("/{order_id}")
def update_order(
    order_id: str,
    request: Request,
    payload: Any = Body(None),
    caller: Caller = Depends(current_caller),
):
    body = body_of(payload)
    products = body.get("products")
    status = blank_to_none(body.get("status"))
    if products is None and status is None:
        raise ServiceError(ErrorKind.INVALID_PAYLOAD, "Empty payload!")
    identity = resolve_identity(caller, _users(request))
    order = _orders(request).update(order_id, identity, products=products, status=status)
    return {"data": order.to_dict()}


@router.delete("/{order_id}")
def delete_order(order_id: str, request: Request, caller: Caller = Depends(current_caller)):
    identity = resolve_identity(caller, _users(request))
    order = _orders(request).delete(order_id, identity)
    return {"data": order.to_dict()}
