"""Data access helpers for working with comments."""
from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from murmur.models.comment import Comment
from murmur.repositories.base import parse_id, store_errors

__all__ = ["CommentRepository"]

ENTITY = "Comment"


class CommentRepository:
    """Thin wrapper around database access for comments."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_id(self, comment_id: str | uuid.UUID) -> Comment | None:
        key = parse_id(comment_id, ENTITY)
        with store_errors(self.session, ENTITY):
            return self.session.get(Comment, key)

    def list_for_post(self, post_id: str | uuid.UUID) -> list[Comment]:
        """Return all comments referencing ``post_id``, oldest first.

        The post itself is not consulted, so comments of a deleted post are
        still returned.
        """
        key = parse_id(post_id, "Post")
        stmt = (
            select(Comment)
            .where(Comment.post_id == key)
            .order_by(Comment.created_at.asc())
        )
        with store_errors(self.session, ENTITY):
            return list(self.session.scalars(stmt))

    def create(self, *, post_id: uuid.UUID, owner_id: uuid.UUID, text: str) -> Comment:
        """Insert a new comment and return the persisted ORM instance."""
        comment = Comment(post_id=post_id, owner_id=owner_id, text=text)
        with store_errors(self.session, ENTITY):
            self.session.add(comment)
            self.session.commit()
            self.session.refresh(comment)
        return comment

    def update_text(self, comment: Comment, text: str) -> Comment:
        with store_errors(self.session, ENTITY):
            comment.text = text
            self.session.commit()
            self.session.refresh(comment)
        return comment

    def delete(self, comment: Comment) -> None:
        with store_errors(self.session, ENTITY):
            self.session.delete(comment)
            self.session.commit()

    def delete_all(self) -> None:
        with store_errors(self.session, ENTITY):
            self.session.query(Comment).delete()
            self.session.commit()
