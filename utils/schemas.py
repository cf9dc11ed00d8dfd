"""
Pydantic schemas for the auth and profile API.

Request and response bodies use camelCase on the wire (``firstName``,
``favoriteGenres``); snake_case field names are accepted on input too.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from config.locales import get_locales
from utils.validators import (
    dedupe,
    normalize_email,
    require_non_blank,
    strip_optional,
    validate_password,
    validate_phone,
)


class Genre(str, Enum):
    ACTION = "action"
    ADVENTURE = "adventure"
    COMEDY = "comedy"
    DRAMA = "drama"
    HORROR = "horror"
    ROMANCE = "romance"
    SCI_FI = "sci-fi"
    THRILLER = "thriller"
    DOCUMENTARY = "documentary"


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RequestModel(ApiModel):
    """Request bodies reject fields they do not declare."""

    model_config = ConfigDict(extra="forbid")


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def _check_language(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    code = value.strip().lower()
    if not get_locales().is_supported(code):
        raise ValueError(
            f"unsupported language '{value}', expected one of {get_locales().list_languages()}"
        )
    return code


# ═══════════════════════════════════════════════════════════════════════════════
# Auth — requests
# ═══════════════════════════════════════════════════════════════════════════════


class SignUpRequest(RequestModel):
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    first_name: str = Field(..., max_length=64)
    last_name: Optional[str] = Field(None, max_length=64)
    nickname: Optional[str] = Field(None, max_length=64)
    phone: Optional[str] = Field(None, max_length=32)
    occupation: Optional[str] = Field(None, max_length=128)
    location: Optional[str] = Field(None, max_length=128)
    bio: Optional[str] = Field(None, max_length=1000)
    favorite_genres: List[Genre] = Field(default_factory=list)
    language: Optional[str] = None

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, v: Any) -> Any:
        return _strip(v)

    @field_validator("email")
    @classmethod
    def normalize_email_field(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        return validate_password(v)

    @field_validator("first_name")
    @classmethod
    def check_first_name(cls, v: str) -> str:
        return require_non_blank(v)

    @field_validator("last_name", "nickname")
    @classmethod
    def check_optional_name(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else require_non_blank(v)

    @field_validator("occupation", "location", "bio")
    @classmethod
    def strip_text(cls, v: Optional[str]) -> Optional[str]:
        return strip_optional(v)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: Optional[str]) -> Optional[str]:
        return validate_phone(v)

    @field_validator("favorite_genres")
    @classmethod
    def dedupe_genres(cls, v: List[Genre]) -> List[Genre]:
        return dedupe(v)

    @field_validator("language")
    @classmethod
    def check_lang(cls, v: Optional[str]) -> Optional[str]:
        return _check_language(v)

    def profile_fields(self) -> dict[str, Any]:
        """Everything except the credentials, ready for the user store."""
        fields = self.model_dump(exclude={"email", "password"})
        fields["favorite_genres"] = [g.value for g in self.favorite_genres]
        return fields


class LoginRequest(RequestModel):
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)

    @field_validator("email")
    @classmethod
    def normalize_email_field(cls, v: str) -> str:
        return normalize_email(v)


# ═══════════════════════════════════════════════════════════════════════════════
# Profile — requests
# ═══════════════════════════════════════════════════════════════════════════════


class UpdateProfileRequest(RequestModel):
    """
    Partial profile patch.

    Only fields present in the body are applied.  ``firstName`` and
    ``email`` may be changed but not cleared; the free-text fields accept
    ``null`` to clear them.
    """

    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(None, max_length=64)
    last_name: Optional[str] = Field(None, max_length=64)
    nickname: Optional[str] = Field(None, max_length=64)
    phone: Optional[str] = Field(None, max_length=32)
    occupation: Optional[str] = Field(None, max_length=128)
    location: Optional[str] = Field(None, max_length=128)
    bio: Optional[str] = Field(None, max_length=1000)
    favorite_genres: Optional[List[Genre]] = None
    language: Optional[str] = None

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, v: Any) -> Any:
        return _strip(v)

    @field_validator("email")
    @classmethod
    def normalize_email_field(cls, v: Optional[str]) -> str:
        # null is rejected: an email can be changed but not cleared
        return normalize_email(require_non_blank(v))

    @field_validator("first_name")
    @classmethod
    def check_first_name(cls, v: Optional[str]) -> str:
        return require_non_blank(v)

    @field_validator("last_name", "nickname")
    @classmethod
    def check_optional_name(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else require_non_blank(v)

    @field_validator("occupation", "location", "bio")
    @classmethod
    def strip_text(cls, v: Optional[str]) -> Optional[str]:
        return strip_optional(v)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: Optional[str]) -> Optional[str]:
        return validate_phone(v)

    @field_validator("favorite_genres")
    @classmethod
    def dedupe_genres(cls, v: Optional[List[Genre]]) -> List[Genre]:
        return dedupe(v) or []

    @field_validator("language")
    @classmethod
    def check_lang(cls, v: Optional[str]) -> Optional[str]:
        return _check_language(v)

    def changes(self) -> dict[str, Any]:
        """Fields the client actually sent, keyed by column name."""
        changes = self.model_dump(exclude_unset=True)
        if "favorite_genres" in changes:
            changes["favorite_genres"] = [g.value for g in self.favorite_genres or []]
        return changes


# ═══════════════════════════════════════════════════════════════════════════════
# Responses
# ═══════════════════════════════════════════════════════════════════════════════


class UserPublic(ApiModel):
    """User representation safe to return to clients (no password hash)."""

    id: str
    email: str
    first_name: str
    last_name: Optional[str] = None
    nickname: Optional[str] = None
    phone: Optional[str] = None
    occupation: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    favorite_genres: List[Genre] = Field(default_factory=list)
    language: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user) -> "UserPublic":
        return cls(
            id=str(user.user_id),
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            nickname=user.nickname,
            phone=user.phone,
            occupation=user.occupation,
            location=user.location,
            bio=user.bio,
            favorite_genres=[Genre(g) for g in user.favorite_genres or []],
            language=user.language,
            created_at=user.created_at,
        )


class AuthResponse(ApiModel):
    user: UserPublic
    token: str
    token_type: str = "Bearer"
    expires_in: int


class GenreLabel(ApiModel):
    value: Genre
    label: str


class ProfileResponse(ApiModel):
    id: str
    email: str
    first_name: str
    last_name: Optional[str] = None
    nickname: Optional[str] = None
    phone: Optional[str] = None
    occupation: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    favorite_genres: List[GenreLabel] = Field(default_factory=list)
    language: Optional[str] = None
    display_language: str
    text_direction: str = "ltr"
    updated_at: Optional[datetime] = None
