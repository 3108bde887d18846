"""Data access helpers for working with users."""
from __future__ import annotations

import uuid

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from murmur.models.user import User
from murmur.repositories.base import parse_id, store_errors

__all__ = ["UserRepository"]

ENTITY = "User"


class UserRepository:
    """Thin wrapper around database access for user records."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, user_id: str | uuid.UUID) -> User | None:
        """Return a user by identifier."""
        key = parse_id(user_id, ENTITY)
        with store_errors(self.session, ENTITY):
            return self.session.get(User, key)

    def get_by_email(self, email: str) -> User | None:
        with store_errors(self.session, ENTITY):
            return self.session.scalars(select(User).where(User.email == email)).first()

    def exists(self, *, username: str, email: str) -> bool:
        """Return True if either the username or the email is taken."""
        stmt = select(User.id).where(or_(User.username == username, User.email == email))
        with store_errors(self.session, ENTITY):
            return self.session.scalars(stmt).first() is not None

    def create(
        self,
        *,
        username: str,
        email: str,
        password_hash: str,
        avatar: str | None = None,
    ) -> User:
        """Insert a new user and return the persisted ORM instance.

        Uniqueness of username and email is enforced by the store; a clash
        surfaces as a ``CONFLICT`` store error.
        """
        user = User(
            username=username,
            email=email,
            password_hash=password_hash,
            avatar=avatar,
        )
        with store_errors(self.session, ENTITY):
            self.session.add(user)
            self.session.commit()
            self.session.refresh(user)
        return user

    def set_avatar(self, user: User, avatar: str | None) -> User:
        with store_errors(self.session, ENTITY):
            user.avatar = avatar
            self.session.commit()
            self.session.refresh(user)
        return user

    def delete_all(self) -> None:
        with store_errors(self.session, ENTITY):
            self.session.query(User).delete()
            self.session.commit()
