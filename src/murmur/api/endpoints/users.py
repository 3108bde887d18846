"""User profile endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from murmur.api.dependencies import CurrentIdentityDep, CurrentUserDep, UserRepoDep
from murmur.schemas.user import ProfileUpdateRequest, UserProfile, UserResponse
from murmur.services.ownership import require_found

router = APIRouter(prefix="/users", tags=["users"])


@router.patch("/me", response_model=UserResponse)
def update_profile(
    payload: ProfileUpdateRequest,
    current_user: CurrentUserDep,
    users: UserRepoDep,
) -> UserResponse:
    """Update the caller's avatar, the only mutable user field."""
    user = users.set_avatar(current_user, payload.avatar)
    return UserResponse.model_validate(user)


@router.get("/{user_id}", response_model=UserProfile)
def get_user_profile(user_id: str, _: CurrentIdentityDep, users: UserRepoDep) -> UserProfile:
    """Return the public profile of any user."""
    user = require_found(users.get_by_id(user_id), "User")
    return UserProfile.model_validate(user)
