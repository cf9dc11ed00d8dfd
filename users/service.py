"""
UserService — profile read and partial update for the authenticated user.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from config.locales import LocaleRegistry
from database.models import User
from database.user_store import UserStore
from utils.errors import NotFoundError, ValidationError
from utils.schemas import Genre, GenreLabel, ProfileResponse, UpdateProfileRequest

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, store: UserStore, locales: LocaleRegistry):
        self.store = store
        self.locales = locales

    async def _load(self, user_id: str | uuid.UUID) -> User:
        user = await self.store.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def _to_profile(self, user: User, language: Optional[str]) -> ProfileResponse:
        display = self.locales.resolve(language, user.language)
        return ProfileResponse(
            id=str(user.user_id),
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            nickname=user.nickname,
            phone=user.phone,
            occupation=user.occupation,
            location=user.location,
            bio=user.bio,
            favorite_genres=[
                GenreLabel(value=Genre(g), label=self.locales.genre_label(g, display))
                for g in user.favorite_genres or []
            ],
            language=user.language,
            display_language=display,
            text_direction=self.locales.direction(display),
            updated_at=user.updated_at,
        )

    async def get_profile(
        self,
        user_id: str | uuid.UUID,
        language: Optional[str] = None,
    ) -> ProfileResponse:
        """
        Return the user's profile with genre labels in ``language``.

        An unsupported or missing ``language`` falls back to the user's
        preferred language, then to the default one.
        """
        user = await self._load(user_id)
        return self._to_profile(user, language)

    async def update_profile(
        self,
        user_id: str | uuid.UUID,
        patch: Union[UpdateProfileRequest, Mapping[str, Any]],
        language: Optional[str] = None,
    ) -> ProfileResponse:
        """
        Apply a partial profile update.

        ``patch`` may be a validated ``UpdateProfileRequest`` or a raw mapping,
        which is validated here with the same rules as signup.  Fields absent
        from the patch are left untouched.
        """
        if not isinstance(patch, UpdateProfileRequest):
            try:
                patch = UpdateProfileRequest.model_validate(dict(patch))
            except PydanticValidationError as exc:
                raise ValidationError.from_pydantic(exc.errors()) from exc

        user = await self._load(user_id)
        changes = patch.changes()
        if changes.get("email") == user.email:
            changes.pop("email")

        if changes:
            user = await self.store.update(user, changes)
            logger.info("Updated profile %s: %s", user.user_id, sorted(changes))
        return self._to_profile(user, language)
