"""Data access helpers for working with posts."""
from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from murmur.models.post import Post, PostLike
from murmur.repositories.base import parse_id, store_errors

__all__ = ["PostRepository"]

ENTITY = "Post"


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, post_id: str | uuid.UUID) -> Post | None:
        """Return a post by identifier.

        Raises:
            StoreError: ``MALFORMED_ID`` if ``post_id`` cannot be an id.
        """
        key = parse_id(post_id, ENTITY)
        with store_errors(self.session, ENTITY):
            return self.session.get(Post, key)

    def list_recent(self) -> list[Post]:
        """Return every post, newest first."""
        stmt = select(Post).order_by(Post.created_at.desc())
        with store_errors(self.session, ENTITY):
            return list(self.session.scalars(stmt))

    def create(
        self,
        *,
        owner_id: uuid.UUID,
        text: str,
        username: str | None = None,
        image: str | None = None,
    ) -> Post:
        """Insert a new post and return the persisted ORM instance.

        Args:
            owner_id: Id of the authenticated author.
            text: Post body.
            username: Display name stored alongside the post.
            image: Optional image URL or upload path.
        """
        post = Post(owner_id=owner_id, text=text, username=username, image=image)
        with store_errors(self.session, ENTITY):
            self.session.add(post)
            self.session.commit()
            self.session.refresh(post)
        return post

    def update_text(self, post: Post, text: str) -> Post:
        with store_errors(self.session, ENTITY):
            post.text = text
            self.session.commit()
            self.session.refresh(post)
        return post

    def delete(self, post: Post) -> None:
        """Remove a post and its likes. Comments are left untouched."""
        with store_errors(self.session, ENTITY):
            self.session.delete(post)
            self.session.commit()

    def add_like(self, post: Post, user_id: uuid.UUID) -> Post:
        with store_errors(self.session, ENTITY):
            post.likes.append(PostLike(user_id=user_id))
            self.session.commit()
            self.session.refresh(post)
        return post

    def remove_like(self, post: Post, user_id: uuid.UUID) -> Post:
        with store_errors(self.session, ENTITY):
            post.likes = [like for like in post.likes if like.user_id != user_id]
            self.session.commit()
            self.session.refresh(post)
        return post

    def delete_all(self) -> None:
        with store_errors(self.session, ENTITY):
            for post in self.session.scalars(select(Post)):
                self.session.delete(post)
            self.session.commit()
