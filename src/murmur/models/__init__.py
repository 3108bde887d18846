# src/murmur/models/__init__.py
"""SQLAlchemy models for the Murmur application."""

from .comment import Comment
from .post import Post, PostLike
from .user import User

__all__ = [
    "Comment",
    "Post", "PostLike",
    "User",
]
