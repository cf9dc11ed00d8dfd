"""
Profile API routes for the authenticated user.

Route prefix: /api/v1/users
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from api.dependencies import get_language, get_user_service
from auth.dependencies import get_current_user
from database.models import User
from users.service import UserService
from utils.schemas import ProfileResponse, UpdateProfileRequest

router = APIRouter(
    tags=["users"],
    dependencies=[Depends(get_current_user)],
    responses={401: {"description": "Missing, invalid or expired token"}},
)


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    user: User = Depends(get_current_user),
    language: Optional[str] = Depends(get_language),
    service: UserService = Depends(get_user_service),
) -> ProfileResponse:
    return await service.get_profile(user.user_id, language)


@router.put(
    "/profile",
    response_model=ProfileResponse,
    responses={400: {"description": "Validation failed"}, 409: {"description": "Email already registered"}},
)
async def update_profile(
    req: UpdateProfileRequest,
    user: User = Depends(get_current_user),
    language: Optional[str] = Depends(get_language),
    service: UserService = Depends(get_user_service),
) -> ProfileResponse:
    """Partial update: only the fields present in the body change."""
    return await service.update_profile(user.user_id, req, language)
