"""Domain primitives: identifiers, records and the error taxonomy."""

from .errors import ErrorKind, ServiceError
from .ids import EntityId, InvalidIdentifier
from .records import (
    ADMIN,
    CUSTOMER,
    ORDER_STATUSES,
    ROLES,
    STATUS_ACTIVE,
    STATUS_COMPLETE,
    LineItem,
    OrderRecord,
    ProductRecord,
    UserRecord,
)

__all__ = [
    "ADMIN",
    "CUSTOMER",
    "ORDER_STATUSES",
    "ROLES",
    "STATUS_ACTIVE",
    "STATUS_COMPLETE",
    "EntityId",
    "ErrorKind",
    "InvalidIdentifier",
    "LineItem",
    "OrderRecord",
    "ProductRecord",
    "ServiceError",
    "UserRecord",
]
