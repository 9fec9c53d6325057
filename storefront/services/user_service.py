"""
User store: account CRUD, credential checks and role validation.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError

from storefront.core.security import hash_password, needs_rehash, verify_password
from storefront.domain.errors import ErrorKind, ServiceError
from storefront.domain.ids import EntityId, InvalidIdentifier
from storefront.domain.records import CUSTOMER, ROLES, UserRecord
from storefront.repositories.users import UserRepository

logger = logging.getLogger(__name__)


def _clean(value) -> str:
    return value.strip() if isinstance(value, str) else ""


class UserService:
    """Handles user creation, lookups, updates and removal."""

    def __init__(self, repository: UserRepository | None = None) -> None:
        self.repository = repository or UserRepository()

    # -------------------------------------- helpers --------------------------------------
    def _parse_id(self, user_id) -> EntityId:
        try:
            return EntityId.parse(user_id)
        except InvalidIdentifier:
            raise ServiceError(ErrorKind.USER_NOT_FOUND, f"There is no user with the given ID: {user_id}")

    def _validate_role(self, role) -> str:
        if role not in ROLES:
            raise ServiceError(ErrorKind.INVALID_ATTRIBUTE, f"Invalid role attribute: {role!r}")
        return role

    def _validate_password(self, password) -> str:
        if not isinstance(password, str) or not password:
            raise ServiceError(ErrorKind.INVALID_ATTRIBUTE, "Every user must have a password!")
        return password

    # -------------------------------------- store contract --------------------------------------
    def create(self, username, password, role=CUSTOMER) -> UserRecord:
        name = _clean(username)
        if not name:
            raise ServiceError(ErrorKind.INVALID_ATTRIBUTE, "Every user must have a username!")
        self._validate_password(password)
        self._validate_role(role if role is not None else CUSTOMER)
        if self.repository.get_by_username(name):
            raise ServiceError(ErrorKind.USERNAME_TAKEN, f"Username already in use: {name}")
        try:
            user = self.repository.add(name, hash_password(password), role or CUSTOMER)
        except IntegrityError:
            # lost a race against a concurrent create with the same username
            raise ServiceError(ErrorKind.USERNAME_TAKEN, f"Username already in use: {name}")
        logger.info("user created id=%s role=%s", user.id, user.role)
        return user

    def read(self, user_id) -> UserRecord:
        uid = self._parse_id(user_id)
        user = self.repository.get(uid)
        if not user:
            raise ServiceError(ErrorKind.USER_NOT_FOUND, f"There is no user with the given ID: {user_id}")
        return user

    def read_one(self, username) -> list[UserRecord]:
        name = _clean(username)
        if not name:
            return []
        user = self.repository.get_by_username(name)
        return [user] if user else []

    def read_all(self, role: str | None = None) -> list[UserRecord]:
        if role is not None and role not in ROLES:
            return []
        return self.repository.list(role)

    def update(self, user_id, password=None, role=None) -> UserRecord:
        uid = self._parse_id(user_id)
        new_hash = None
        if password is not None:
            new_hash = hash_password(self._validate_password(password))
        if role is not None:
            self._validate_role(role)
        user = self.repository.update(uid, password_hash=new_hash, role=role)
        if not user:
            raise ServiceError(ErrorKind.USER_NOT_FOUND, f"There is no user with the given ID: {user_id}")
        logger.info("user updated id=%s", user.id)
        return user

    def delete(self, user_id) -> UserRecord:
        uid = self._parse_id(user_id)
        user = self.repository.remove(uid)
        if not user:
            raise ServiceError(ErrorKind.USER_NOT_FOUND, f"There is no user with the given ID: {user_id}")
        logger.info("user deleted id=%s", user.id)
        return user

    # -------------------------------------- credentials --------------------------------------
    def verify_credentials(self, username, password) -> Optional[UserRecord]:
        name = _clean(username)
        if not name or not isinstance(password, str):
            return None
        user = self.repository.get_by_username(name)
        if not user or not verify_password(password, user.password_hash):
            return None
        if needs_rehash(user.password_hash):
            self.repository.update(user.id, password_hash=hash_password(password))
        return user
