"""
AuthService — signup and login.

The service owns no state; the user store, password hasher and token
issuer are handed in by ``api.dependencies``.
"""

from __future__ import annotations

import asyncio
import logging

from auth.jwt import TokenIssuer
from auth.password import PasswordHasher
from database.models import User
from database.user_store import EMAIL_TAKEN, UserStore
from utils.errors import ConflictError, UnauthorizedError
from utils.schemas import AuthResponse, LoginRequest, SignUpRequest, UserPublic

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class AuthService:
    def __init__(self, store: UserStore, hasher: PasswordHasher, tokens: TokenIssuer):
        self.store = store
        self.hasher = hasher
        self.tokens = tokens

    def _auth_response(self, user: User) -> AuthResponse:
        return AuthResponse(
            user=UserPublic.from_user(user),
            token=self.tokens.issue(str(user.user_id)),
            expires_in=self.tokens.expiry_seconds,
        )

    async def sign_up(self, request: SignUpRequest) -> AuthResponse:
        """Register a new user and log them straight in."""
        if await self.store.get_by_email(request.email) is not None:
            raise ConflictError(EMAIL_TAKEN)

        password_hash = await asyncio.to_thread(self.hasher.hash, request.password)
        # create() re-checks atomically; a concurrent signup still ends in ConflictError.
        user = await self.store.create(
            email=request.email,
            password_hash=password_hash,
            **request.profile_fields(),
        )
        logger.info("Registered user %s", user.user_id)
        return self._auth_response(user)

    async def login(self, request: LoginRequest) -> AuthResponse:
        """Login with email + password.  Unknown email and wrong password fail alike."""
        user = await self.store.get_by_email(request.email)
        if user is None:
            logger.info("Login failed: unknown email")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        valid = await asyncio.to_thread(self.hasher.verify, request.password, user.password_hash)
        if not valid:
            logger.info("Login failed: bad password for %s", user.user_id)
            raise UnauthorizedError(INVALID_CREDENTIALS)

        logger.info("Login: %s", user.user_id)
        return self._auth_response(user)
