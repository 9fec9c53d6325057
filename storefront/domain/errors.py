"""
Failure taxonomy for stores and services.

Services raise ServiceError tagged with an ErrorKind; the HTTP boundary maps
the kind to a status code. Nothing below the routers knows about HTTP.
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    INVALID_PAYLOAD = ("invalid_payload", 400)
    MISSING_CUSTOMER = ("missing_customer", 403)
    UNKNOWN_CUSTOMER = ("unknown_customer", 404)
    INVALID_QUANTITY = ("invalid_quantity", 400)
    UNKNOWN_PRODUCT = ("unknown_product", 400)
    PRODUCT_NOT_FOUND = ("product_not_found", 404)
    INVALID_PRODUCT = ("invalid_product", 400)
    INVALID_STATUS = ("invalid_status", 400)
    ORDER_NOT_FOUND = ("order_not_found", 404)
    USER_NOT_FOUND = ("user_not_found", 404)
    INVALID_ATTRIBUTE = ("invalid_attribute", 400)
    USERNAME_TAKEN = ("username_taken", 409)
    FORBIDDEN = ("forbidden", 403)
    UNAUTHENTICATED = ("unauthenticated", 403)

    def __init__(self, code: str, status_code: int):
        self.code = code
        self.status_code = status_code


class ServiceError(Exception):
    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def __repr__(self) -> str:
        return f"ServiceError({self.kind.name}, {self.message!r})"
