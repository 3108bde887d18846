# src/murmur/models/post.py
"""SQLAlchemy models for posts and their likes."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from murmur.db.session import Base
from murmur.db.time import utcnow


class Post(Base):
    """Primary content entity produced by users."""

    __tablename__ = "post"
    __table_args__ = (Index("ix_post_created_at", "created_at"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("user_account.id"),
        nullable=False,
    )
    # Display name copied in at creation time; never kept in sync with the user.
    username: Mapped[str | None] = mapped_column(String(64), nullable=True)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    image: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    likes: Mapped[list[PostLike]] = relationship(
        "PostLike",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="PostLike.created_at",
        lazy="selectin",
    )

    @property
    def liked_by(self) -> list[uuid.UUID]:
        """Return the ids of users who liked this post."""
        return [like.user_id for like in self.likes]


class PostLike(Base):
    """One user's like on a post.

    The composite primary key keeps likes a set: a user likes a post at most once.
    """

    __tablename__ = "post_like"

    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("user_account.id"),
        primary_key=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    post: Mapped[Post] = relationship("Post", back_populates="likes")
