"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import bcrypt

# bcrypt only reads the first 72 bytes of its input.
_BCRYPT_MAX_BYTES = 72


class PasswordHasher(ABC):
    @abstractmethod
    def hash(self, password: str) -> str:
        ...

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        ...


class BcryptPasswordHasher(PasswordHasher):
    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a password with bcrypt (auto-salted)."""
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=self.rounds)).decode()

    def verify(self, password: str, password_hash: str) -> bool:
        """Constant-time comparison against a bcrypt hash."""
        secret = password.encode()
        if len(secret) > _BCRYPT_MAX_BYTES:
            return False
        try:
            return bcrypt.checkpw(secret, password_hash.encode())
        except (ValueError, TypeError):
            return False
