"""
Shared fixtures.

Environment defaults are set before any application module is imported so
``config.settings.config`` picks them up.
"""

import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("USER_STORE", "memory")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from api.dependencies import get_password_hasher, get_token_issuer, get_user_store
from auth.jwt import TokenIssuer
from auth.password import BcryptPasswordHasher
from auth.service import AuthService
from config.locales import get_locales
from database.user_store import InMemoryUserStore
from users.service import UserService

TEST_SECRET = "test-secret"


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return InMemoryUserStore()


@pytest.fixture
def hasher():
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def tokens():
    return TokenIssuer(TEST_SECRET, 3600)


@pytest.fixture
def past_tokens():
    """Same secret as ``tokens`` but a clock stuck far in the past."""
    return TokenIssuer(TEST_SECRET, 3600, clock=lambda: 1_000_000.0)


@pytest.fixture
def auth_service(store, hasher, tokens):
    return AuthService(store, hasher, tokens)


@pytest.fixture
def user_service(store):
    return UserService(store, get_locales())


@pytest.fixture
def app(store, hasher, tokens):
    from main import app as fastapi_app

    fastapi_app.dependency_overrides[get_user_store] = lambda: store
    fastapi_app.dependency_overrides[get_password_hasher] = lambda: hasher
    fastapi_app.dependency_overrides[get_token_issuer] = lambda: tokens
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
