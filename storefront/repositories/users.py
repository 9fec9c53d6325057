"""SQL-backed user persistence."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import delete, select

from storefront.db.models import User
from storefront.db.session import get_session
from storefront.domain.ids import EntityId
from storefront.domain.records import UserRecord


def _to_record(entity: User) -> UserRecord:
    return UserRecord(
        id=EntityId.parse(entity.id),
        username=entity.username,
        role=entity.role,
        password_hash=entity.password_hash or "",
    )


class UserRepository:
    def add(self, username: str, password_hash: str, role: str) -> UserRecord:
        now = datetime.now(timezone.utc)
        entity = User(
            id=EntityId.new().value,
            username=username,
            password_hash=password_hash,
            role=role,
            created_at=now,
            updated_at=now,
        )
        with get_session() as session:
            session.add(entity)
            session.commit()
            session.refresh(entity)
            return _to_record(entity)

    def get(self, user_id: EntityId) -> Optional[UserRecord]:
        with get_session() as session:
            entity = session.get(User, user_id.value)
            return _to_record(entity) if entity else None

    def get_by_username(self, username: str) -> Optional[UserRecord]:
        with get_session() as session:
            stmt = select(User).where(User.username == username)
            entity = session.execute(stmt).scalar_one_or_none()
            return _to_record(entity) if entity else None

    def list(self, role: str | None = None) -> list[UserRecord]:
        with get_session() as session:
            stmt = select(User).order_by(User.created_at, User.username)
            if role is not None:
                stmt = stmt.where(User.role == role)
            return [_to_record(e) for e in session.execute(stmt).scalars().all()]

    def update(
        self,
        user_id: EntityId,
        *,
        password_hash: str | None = None,
        role: str | None = None,
    ) -> Optional[UserRecord]:
        with get_session() as session:
            entity = session.get(User, user_id.value)
            if not entity:
                return None
            if password_hash is not None:
                entity.password_hash = password_hash
            if role is not None:
                entity.role = role
            entity.updated_at = datetime.now(timezone.utc)
            session.commit()
            session.refresh(entity)
            return _to_record(entity)

    def remove(self, user_id: EntityId) -> Optional[UserRecord]:
        with get_session() as session:
            entity = session.get(User, user_id.value)
            if not entity:
                return None
            record = _to_record(entity)
            session.execute(delete(User).where(User.id == user_id.value))
            session.commit()
            return record
