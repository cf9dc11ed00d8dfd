"""
Credential store — persistence for ``User`` records.

``UserStore`` is the interface the services depend on.  ``SqlUserStore``
backs it with an async SQLAlchemy session; ``InMemoryUserStore`` keeps
users in a dict and is selected with ``USER_STORE=memory`` (local runs,
tests).

Emails are expected already normalized (see ``utils.validators``); both
stores enforce their uniqueness and raise ``ConflictError`` on a clash.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import User
from utils.errors import ConflictError

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "Email already registered"


def _to_uuid(value: str | uuid.UUID) -> Optional[uuid.UUID]:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(value)
    except (ValueError, TypeError, AttributeError):
        return None


class UserStore(ABC):
    @abstractmethod
    async def get_by_id(self, user_id: str | uuid.UUID) -> Optional[User]:
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        ...

    @abstractmethod
    async def create(self, email: str, password_hash: str, **profile: Any) -> User:
        """Persist a new user.  Raises ``ConflictError`` if the email exists."""

    @abstractmethod
    async def update(self, user: User, changes: Dict[str, Any]) -> User:
        """Apply ``changes`` to ``user``.  Raises ``ConflictError`` on an email clash."""


class SqlUserStore(UserStore):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: str | uuid.UUID) -> Optional[User]:
        uid = _to_uuid(user_id)
        if uid is None:
            return None
        result = await self.session.execute(select(User).where(User.user_id == uid))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def create(self, email: str, password_hash: str, **profile: Any) -> User:
        user = User(
            user_id=uuid.uuid4(),
            email=email,
            password_hash=password_hash,
            **profile,
        )
        self.session.add(user)
        try:
            # The unique index is the source of truth when two signups race.
            await self.session.flush()
        except IntegrityError as exc:
            await self.session.rollback()
            raise ConflictError(EMAIL_TAKEN) from exc
        return user

    async def update(self, user: User, changes: Dict[str, Any]) -> User:
        for field, value in changes.items():
            setattr(user, field, value)
        user.updated_at = datetime.now(timezone.utc)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            await self.session.rollback()
            raise ConflictError(EMAIL_TAKEN) from exc
        return user


class InMemoryUserStore(UserStore):
    """Dict-backed store.  Writes are serialized by a lock so the email check stays atomic."""

    def __init__(self) -> None:
        self._users: Dict[uuid.UUID, User] = {}
        self._lock = asyncio.Lock()

    async def get_by_id(self, user_id: str | uuid.UUID) -> Optional[User]:
        uid = _to_uuid(user_id)
        return self._users.get(uid) if uid is not None else None

    async def get_by_email(self, email: str) -> Optional[User]:
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    async def create(self, email: str, password_hash: str, **profile: Any) -> User:
        async with self._lock:
            if await self.get_by_email(email) is not None:
                raise ConflictError(EMAIL_TAKEN)
            now = datetime.now(timezone.utc)
            profile.setdefault("favorite_genres", [])
            user = User(
                user_id=uuid.uuid4(),
                email=email,
                password_hash=password_hash,
                created_at=now,
                updated_at=now,
                **profile,
            )
            self._users[user.user_id] = user
        return user

    async def update(self, user: User, changes: Dict[str, Any]) -> User:
        async with self._lock:
            new_email = changes.get("email")
            if new_email is not None and new_email != user.email:
                clash = await self.get_by_email(new_email)
                if clash is not None and clash.user_id != user.user_id:
                    raise ConflictError(EMAIL_TAKEN)
            for field, value in changes.items():
                setattr(user, field, value)
            user.updated_at = datetime.now(timezone.utc)
        return user

    async def delete(self, user_id: str | uuid.UUID) -> bool:
        uid = _to_uuid(user_id)
        return self._users.pop(uid, None) is not None

    def __len__(self) -> int:
        return len(self._users)
