"""Post-related Pydantic schemas."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from murmur.db.time import as_utc


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    text: str = Field(..., min_length=1, description="Post body")
    username: str | None = Field(None, description="Display name shown with the post")
    image: str | None = Field(None, description="URL or upload path of an attached image")


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: uuid.UUID
    owner_id: uuid.UUID
    username: str | None
    text: str
    image: str | None
    likes: list[uuid.UUID]
    created_at: datetime

    @model_validator(mode="before")
    @classmethod
    def _flatten_likes(cls, data: object) -> object:
        if not isinstance(data, dict):
            extracted: dict[str, object | None] = {}
            for field_name in cls.model_fields:
                if field_name == "likes":
                    extracted["likes"] = getattr(data, "liked_by", [])
                else:
                    extracted[field_name] = getattr(data, field_name, None)
            data = extracted
        return data

    @field_validator("created_at")
    @classmethod
    def _ensure_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    model_config = ConfigDict(from_attributes=True)
