"""
Tests for AuthService — signup and login against the in-memory store.
"""

import pytest

from utils.errors import ConflictError, UnauthorizedError
from utils.schemas import Genre, LoginRequest, SignUpRequest


def _signup(email="a@b.com", password="secret1", **profile) -> SignUpRequest:
    profile.setdefault("first_name", "A")
    return SignUpRequest(email=email, password=password, **profile)


class TestSignUp:
    @pytest.mark.asyncio
    async def test_creates_user_and_token(self, auth_service, store, tokens):
        result = await auth_service.sign_up(_signup())

        assert result.user.email == "a@b.com"
        assert result.user.first_name == "A"
        assert result.token
        assert tokens.verify(result.token) == result.user.id
        assert len(store) == 1

    @pytest.mark.asyncio
    async def test_never_exposes_password(self, auth_service, store):
        result = await auth_service.sign_up(_signup())

        dumped = result.model_dump_json(by_alias=True)
        assert "secret1" not in dumped
        assert "password" not in dumped.lower()

        user = await store.get_by_email("a@b.com")
        assert user.password_hash != "secret1"

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self, auth_service):
        await auth_service.sign_up(_signup())
        with pytest.raises(ConflictError):
            await auth_service.sign_up(_signup())

    @pytest.mark.asyncio
    async def test_duplicate_email_is_case_insensitive(self, auth_service):
        await auth_service.sign_up(_signup(email="a@b.com"))
        with pytest.raises(ConflictError):
            await auth_service.sign_up(_signup(email="  A@B.COM "))

    @pytest.mark.asyncio
    async def test_stores_profile_fields(self, auth_service, store):
        await auth_service.sign_up(
            _signup(
                last_name="B",
                occupation="Editor",
                favorite_genres=[Genre.DRAMA, Genre.COMEDY, Genre.DRAMA],
                language="es",
            )
        )
        user = await store.get_by_email("a@b.com")
        assert user.last_name == "B"
        assert user.occupation == "Editor"
        assert user.favorite_genres == ["drama", "comedy"]
        assert user.language == "es"


class TestLogin:
    @pytest.mark.asyncio
    async def test_success(self, auth_service, tokens):
        created = await auth_service.sign_up(_signup())
        result = await auth_service.login(LoginRequest(email="A@b.com", password="secret1"))

        assert result.user.id == created.user.id
        assert tokens.verify(result.token) == created.user.id

    @pytest.mark.asyncio
    async def test_unknown_email_and_bad_password_fail_alike(self, auth_service):
        await auth_service.sign_up(_signup())

        with pytest.raises(UnauthorizedError) as unknown:
            await auth_service.login(LoginRequest(email="nobody@b.com", password="secret1"))
        with pytest.raises(UnauthorizedError) as wrong:
            await auth_service.login(LoginRequest(email="a@b.com", password="secret2"))

        assert unknown.value.message == wrong.value.message

    @pytest.mark.asyncio
    async def test_any_single_character_mutation_fails(self, auth_service):
        password = "secret1"
        await auth_service.sign_up(_signup(password=password))

        mutations = set()
        for i, ch in enumerate(password):
            mutations.add(password[:i] + ("x" if ch != "x" else "y") + password[i + 1:])
            mutations.add(password[:i] + password[i + 1:])
        mutations.add(password + "!")
        mutations.add(password.upper())
        mutations.discard(password)

        for mutated in mutations:
            with pytest.raises(UnauthorizedError):
                await auth_service.login(LoginRequest(email="a@b.com", password=mutated))

    @pytest.mark.asyncio
    async def test_mutation_past_72_bytes_fails(self, auth_service):
        password = "a" * 72
        await auth_service.sign_up(_signup(password=password))

        await auth_service.login(LoginRequest(email="a@b.com", password=password))
        with pytest.raises(UnauthorizedError):
            await auth_service.login(LoginRequest(email="a@b.com", password=password + "!"))
