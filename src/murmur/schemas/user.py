"""User-related Pydantic schemas."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from murmur.db.time import as_utc


def _normalise_email(value: str) -> str:
    return value.lower()


class RegisterRequest(BaseModel):
    """Schema for account registration."""

    username: str = Field(..., min_length=1, max_length=64, description="Unique handle")
    email: EmailStr = Field(..., description="Unique email address")
    password: str = Field(..., min_length=6, description="Plain password, hashed before storage")

    @field_validator("email", mode="after")
    @classmethod
    def normalise_email(cls, v: str) -> str:
        """Store addresses lower-cased so lookups ignore case."""
        return _normalise_email(v)


class LoginRequest(BaseModel):
    """Schema for login submissions."""

    email: EmailStr = Field(..., description="Registered email address")
    password: str = Field(..., min_length=1, description="Plain password")

    @field_validator("email", mode="after")
    @classmethod
    def normalise_email(cls, v: str) -> str:
        return _normalise_email(v)


class TokenResponse(BaseModel):
    """Response returned after registration or login."""

    token: str = Field(..., description="JWT access token for the x-auth-token header")


class ProfileUpdateRequest(BaseModel):
    """Schema for updating the mutable part of a user profile."""

    avatar: str | None = Field(..., description="URL or upload path of the profile picture")


class UserResponse(BaseModel):
    """The caller's own account, without credentials."""

    id: uuid.UUID
    username: str
    email: str
    avatar: str | None
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def _ensure_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    model_config = ConfigDict(from_attributes=True)


class UserProfile(BaseModel):
    """Public view of another user's account."""

    id: uuid.UUID
    username: str
    avatar: str | None
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def _ensure_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    model_config = ConfigDict(from_attributes=True)
