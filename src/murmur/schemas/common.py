"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, Field


class Message(BaseModel):
    """Confirmation body returned by delete endpoints."""

    msg: str = Field(..., description="Human-readable confirmation")


class FieldError(BaseModel):
    """One field-level validation failure."""

    msg: str
    param: str
    location: str = "body"


class TextUpdate(BaseModel):
    """Body of every endpoint that replaces an entity's text."""

    text: str = Field(..., min_length=1, description="New text content")
