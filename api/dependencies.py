"""
FastAPI dependencies (shared across routes).

Services are built per request from their collaborators; swap any of the
factories below with ``app.dependency_overrides`` to change the wiring.
"""

from __future__ import annotations

from functools import lru_cache
from typing import AsyncGenerator, Optional

from fastapi import Depends, Query, Request

from auth.jwt import TokenIssuer
from auth.password import BcryptPasswordHasher, PasswordHasher
from auth.service import AuthService
from config.locales import LocaleRegistry, get_locales
from config.settings import config
from database.session import session_scope
from database.user_store import InMemoryUserStore, SqlUserStore, UserStore
from users.service import UserService


@lru_cache()
def memory_user_store() -> InMemoryUserStore:
    return InMemoryUserStore()


async def get_user_store() -> AsyncGenerator[UserStore, None]:
    """
    Yield the configured credential store (``USER_STORE=sql|memory``).

    The SQL store gets its own session for the request, committed once the
    response is produced; the memory store never touches the database.
    """
    if config.user_store == "memory":
        yield memory_user_store()
        return
    async with session_scope() as session:
        yield SqlUserStore(session)


@lru_cache()
def get_password_hasher() -> PasswordHasher:
    return BcryptPasswordHasher(rounds=config.bcrypt_rounds)


@lru_cache()
def get_token_issuer() -> TokenIssuer:
    return TokenIssuer(config.jwt_secret, config.jwt_expiry_seconds)


def get_auth_service(
    store: UserStore = Depends(get_user_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    return AuthService(store, hasher, tokens)


def get_user_service(
    store: UserStore = Depends(get_user_store),
    locales: LocaleRegistry = Depends(get_locales),
) -> UserService:
    return UserService(store, locales)


def get_language(
    request: Request,
    lang: Optional[str] = Query(None, description="Display language code, e.g. 'es'"),
    locales: LocaleRegistry = Depends(get_locales),
) -> Optional[str]:
    """
    Language the client asked for: ``?lang=`` first, then ``Accept-Language``.

    Returns ``None`` when neither names a supported language, leaving the
    user's own preference to decide.  The result is kept on
    ``request.state.language``.
    """
    language = None
    if locales.is_supported((lang or "").strip().lower()):
        language = lang.strip().lower()
    else:
        language = locales.negotiate(request.headers.get("accept-language"))
    request.state.language = language
    return language
