"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .comment import CommentCreate, CommentOwner, CommentResponse
from .common import FieldError, Message, TextUpdate
from .post import PostCreate, PostResponse
from .user import (
    LoginRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    TokenResponse,
    UserProfile,
    UserResponse,
)

__all__ = [
    "CommentCreate", "CommentOwner", "CommentResponse",
    "FieldError", "Message", "TextUpdate",
    "PostCreate", "PostResponse",
    "LoginRequest", "ProfileUpdateRequest", "RegisterRequest",
    "TokenResponse", "UserProfile", "UserResponse",
]
