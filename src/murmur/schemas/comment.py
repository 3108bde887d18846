"""Comment-related Pydantic schemas."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from murmur.db.time import as_utc


class CommentCreate(BaseModel):
    """Schema for commenting on a post."""

    text: str = Field(..., min_length=1, description="Comment body")


class CommentOwner(BaseModel):
    """Author of a comment, resolved to a display name."""

    id: uuid.UUID
    username: str

    model_config = ConfigDict(from_attributes=True)


class CommentResponse(BaseModel):
    """Schema for comment information returned by the API."""

    id: uuid.UUID
    post_id: uuid.UUID
    owner_id: uuid.UUID
    owner: CommentOwner | None = None
    text: str
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def _ensure_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    model_config = ConfigDict(from_attributes=True)
