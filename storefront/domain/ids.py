"""Opaque identifiers shared by users, products and orders."""
from __future__ import annotations

import re
import uuid
from dataclasses import dataclass

ID_PATTERN = re.compile(r"[0-9a-f]{32}")


class InvalidIdentifier(ValueError):
    """Raised when a raw value does not have the shape of an EntityId."""


@dataclass(frozen=True)
class EntityId:
    """32-char lowercase hex identifier. Compare ids, never their strings."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not ID_PATTERN.fullmatch(self.value):
            raise InvalidIdentifier(f"Malformed identifier: {self.value!r}")

    @classmethod
    def new(cls) -> "EntityId":
        return cls(uuid.uuid4().hex)

    @classmethod
    def parse(cls, raw: "EntityId | str | None") -> "EntityId":
        if isinstance(raw, EntityId):
            return raw
        if not isinstance(raw, str):
            raise InvalidIdentifier(f"Malformed identifier: {raw!r}")
        return cls(raw.strip().lower())

    def __str__(self) -> str:
        return self.value
