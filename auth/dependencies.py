"""
FastAPI dependencies for authentication.

``get_current_user`` is the guard every protected route depends on: it
reads the Bearer token, verifies it, loads the user and stores it on
``request.state.user``.  Any failure rejects the request with 401 before
the handler runs.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.dependencies import get_token_issuer, get_user_store
from auth.jwt import TokenIssuer
from database.models import User
from database.user_store import UserStore
from utils.errors import UnauthorizedError

logger = logging.getLogger(__name__)

# auto_error=False so a missing header surfaces as our own 401 body.
_bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    tokens: TokenIssuer = Depends(get_token_issuer),
    store: UserStore = Depends(get_user_store),
) -> User:
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Missing Bearer token")

    user_id = tokens.verify(credentials.credentials)

    user = await store.get_by_id(user_id)
    if user is None:
        logger.info("Token for unknown user %s rejected", user_id)
        raise UnauthorizedError("User no longer exists")

    request.state.user = user
    return user
