"""
Field validators shared by the signup and profile-update schemas.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

_PHONE_RE = re.compile(r"^\+?[0-9 ().-]+$")
_MIN_PHONE_DIGITS = 7
_MAX_PHONE_DIGITS = 15     # E.164
_MAX_PASSWORD_BYTES = 72   # bcrypt ignores anything past this


def normalize_email(email: str) -> str:
    return email.strip().lower()


def require_non_blank(value: Optional[str]) -> str:
    if value is None or not value.strip():
        raise ValueError("must not be empty")
    return value.strip()


def strip_optional(value: Optional[str]) -> Optional[str]:
    """Trim free-text fields; blank strings are stored as ``None``."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def validate_phone(value: Optional[str]) -> Optional[str]:
    value = strip_optional(value)
    if value is None:
        return None
    if not _PHONE_RE.match(value):
        raise ValueError("must contain only digits, spaces, '+', '-', '.', '(' and ')'")
    digits = sum(ch.isdigit() for ch in value)
    if not _MIN_PHONE_DIGITS <= digits <= _MAX_PHONE_DIGITS:
        raise ValueError(
            f"must contain between {_MIN_PHONE_DIGITS} and {_MAX_PHONE_DIGITS} digits"
        )
    return value


def validate_password(value: str) -> str:
    if len(value.encode("utf-8")) > _MAX_PASSWORD_BYTES:
        raise ValueError(f"must be at most {_MAX_PASSWORD_BYTES} bytes")
    return value


def dedupe(values: Optional[Iterable]) -> Optional[List]:
    """Drop repeated tags while keeping first-seen order."""
    if values is None:
        return None
    seen: list = []
    for value in values:
        if value not in seen:
            seen.append(value)
    return seen
