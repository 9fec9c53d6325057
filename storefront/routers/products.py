from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Request

from storefront.core.tokens import Caller
from storefront.domain.errors import ErrorKind, ServiceError
from storefront.domain.ids import InvalidIdentifier
from storefront.routers.common import body_of, get_service
from storefront.services.access_service import require_admin

router = APIRouter(prefix="/api/products", tags=["products"])


def _products(request: Request):
    return get_service(request, "product_service")


def _not_found(product_id: str) -> ServiceError:
    return ServiceError(ErrorKind.PRODUCT_NOT_FOUND, f"There is no product with the given ID: {product_id}")


@router.get("")
def list_products(request: Request, name: Optional[str] = None):
    return {"data": [p.to_dict() for p in _products(request).read_all(name)]}


@router.get("/{product_id}")
def read_product(product_id: str, request: Request):
    try:
        product = _products(request).read(product_id)
    except InvalidIdentifier:
        raise _not_found(product_id)
    return {"data": product.to_dict()}


@router.post("", status_code=201)
def create_product(request: Request, payload: Any = Body(None), caller: Caller = Depends(require_admin)):
    body = body_of(payload)
    product = _products(request).create(body.get("name"), body.get("price"))
    return {"data": product.to_dict()}


@router.put("/{product_id}")
def update_product(
    product_id: str,
    request: Request,
    payload: Any = Body(None),
    caller: Caller = Depends(require_admin),
):
    body = body_of(payload)
    name, price = body.get("name"), body.get("price")
    if name is None and price is None:
        raise ServiceError(ErrorKind.INVALID_PAYLOAD, "You must provide at least one product attribute!")
    try:
        product = _products(request).update(product_id, name=name, price=price)
    except InvalidIdentifier:
        raise _not_found(product_id)
    return {"data": product.to_dict()}


@router.delete("/{product_id}")
def delete_product(product_id: str, request: Request, caller: Caller = Depends(require_admin)):
    try:
        product = _products(request).delete(product_id)
    except InvalidIdentifier:
        raise _not_found(product_id)
    return {"data": product.to_dict()}
