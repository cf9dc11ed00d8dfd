"""
JWT-style session token creation and verification.

Tokens are base64-encoded JSON payloads signed with HMAC-SHA256::

    base64({"user_id": ..., "iat": ..., "exp": ...}) + "." + hex(hmac)

The secret key is loaded from ``config.jwt_secret`` (env var: ``JWT_SECRET``).
Nothing is stored server-side; a token lives until its ``exp``.
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
import json
import time
from base64 import b64decode, b64encode
from typing import Callable

from utils.errors import ExpiredTokenError, InvalidTokenError


class TokenIssuer:
    def __init__(
        self,
        secret: str,
        expiry_seconds: int,
        clock: Callable[[], float] = time.time,
    ):
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret.encode()
        self.expiry_seconds = expiry_seconds
        self._clock = clock

    def _sign(self, raw: bytes) -> str:
        return hmac.new(self._secret, raw, hashlib.sha256).hexdigest()

    def issue(self, user_id: str) -> str:
        """Create a signed token containing ``user_id``, issue time and expiry."""
        now = self._clock()
        payload = {
            "user_id": str(user_id),
            "iat": now,
            "exp": int(now) + self.expiry_seconds,
        }
        raw = json.dumps(payload, separators=(",", ":")).encode()
        return b64encode(raw).decode() + "." + self._sign(raw)

    def verify(self, token: str) -> str:
        """
        Verify token and return ``user_id``.

        Raises ``InvalidTokenError`` when the token is malformed or its
        signature does not match, ``ExpiredTokenError`` once ``exp`` has passed.
        """
        encoded, sep, signature = token.partition(".")
        if not sep or not encoded or not signature:
            raise InvalidTokenError("Malformed token")
        try:
            raw = b64decode(encoded, validate=True)
        except (binascii.Error, ValueError):
            raise InvalidTokenError("Malformed token")

        if not hmac.compare_digest(signature.encode(), self._sign(raw).encode()):
            raise InvalidTokenError("Invalid token signature")

        try:
            payload = json.loads(raw)
            user_id = payload["user_id"]
            exp = float(payload["exp"])
        except (ValueError, KeyError, TypeError):
            raise InvalidTokenError("Malformed token payload")

        if self._clock() >= exp:
            raise ExpiredTokenError("Token has expired")
        return user_id
