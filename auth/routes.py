"""
Auth API routes — signup, login.

Route prefix: /api/v1/auth
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from api.dependencies import get_auth_service
from auth.service import AuthService
from utils.schemas import AuthResponse, LoginRequest, SignUpRequest

router = APIRouter(tags=["auth"])


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Validation failed"}, 409: {"description": "Email already registered"}},
)
async def signup(
    req: SignUpRequest,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Register a new user and return it with a session token."""
    return await service.sign_up(req)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={401: {"description": "Invalid email or password"}},
)
async def login(
    req: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Login with email + password."""
    return await service.login(req)
