# src/murmur/api/endpoints/auth.py
"""Authentication endpoints for the Murmur API."""

from __future__ import annotations

from fastapi import APIRouter

from murmur.api.dependencies import ContextDep, CurrentUserDep, UserRepoDep
from murmur.core.security import create_access_token
from murmur.schemas.user import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from murmur.services.user_service import authenticate_user, register_user

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/register",
    summary="Register a new account",
    response_model=TokenResponse,
)
def register(payload: RegisterRequest, users: UserRepoDep, context: ContextDep) -> TokenResponse:
    """Create an account and return a token for it."""
    user = register_user(users, payload)
    return TokenResponse(token=create_access_token(user.id, context.settings))


@router.post(
    "/login",
    summary="Authenticate with email and password",
    response_model=TokenResponse,
)
def login(payload: LoginRequest, users: UserRepoDep, context: ContextDep) -> TokenResponse:
    """Exchange valid credentials for a token."""
    user = authenticate_user(users, payload)
    return TokenResponse(token=create_access_token(user.id, context.settings))


@router.get("", summary="Return the authenticated user", response_model=UserResponse)
def read_current_user(current_user: CurrentUserDep) -> UserResponse:
    return UserResponse.model_validate(current_user)
