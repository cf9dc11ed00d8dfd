"""
SQLAlchemy ORM models.

Column types are the dialect-neutral ones so the same models run on
PostgreSQL (asyncpg) in deployment and SQLite (aiosqlite) in tests.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, String, Text, Uuid
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    user_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(64), nullable=False)
    last_name = Column(String(64))
    nickname = Column(String(64))
    phone = Column(String(32))
    occupation = Column(String(128))
    location = Column(String(128))
    bio = Column(Text)
    favorite_genres = Column(JSON, nullable=False, default=list)
    language = Column(String(8))
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    def __repr__(self) -> str:
        return f"<User {self.user_id} {self.email}>"
