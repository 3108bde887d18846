# tests/conftest.py
from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import timedelta
from pathlib import Path
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from murmur.core.context import AppContext, build_context
from murmur.core.security import create_access_token, hash_password
from murmur.core.settings import Settings
from murmur.db.session import create_tables, drop_tables
from murmur.main import create_app
from murmur.models import Comment, Post, User

TEST_DB_URL = "sqlite://"
TEST_SECRET = "test-secret-key"
TEST_PASSWORD = "password123"

# Hashing once keeps fixture setup fast.
_PASSWORD_HASH = hash_password(TEST_PASSWORD)


@pytest.fixture()
def upload_dir(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture()
def test_settings(upload_dir: Path) -> Settings:
    """Settings for an isolated in-memory store and a temporary upload dir."""
    return Settings(
        JWT_SECRET=TEST_SECRET,
        DATABASE_URL=TEST_DB_URL,
        UPLOAD_DIR=str(upload_dir),
        LOG_LEVEL="WARNING",
    )


@pytest.fixture()
def context(test_settings: Settings) -> Iterator[AppContext]:
    context = build_context(test_settings)
    create_tables(context.engine)
    try:
        yield context
    finally:
        drop_tables(context.engine)
        context.dispose()


@pytest.fixture()
def app(context: AppContext) -> FastAPI:
    return create_app(context=context)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def db_session(context: AppContext) -> Iterator[Session]:
    session = context.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory that persists users with the shared test password."""

    def _make(username: str, email: str | None = None) -> User:
        user = User(
            username=username,
            email=email or f"{username.lower()}@example.com",
            password_hash=_PASSWORD_HASH,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make


@pytest.fixture()
def alice(make_user: Callable[..., User]) -> User:
    return make_user("alice")


@pytest.fixture()
def bob(make_user: Callable[..., User]) -> User:
    return make_user("bob")


def token_headers(user_id: Any, settings: Settings, **kwargs: Any) -> dict[str, str]:
    return {"x-auth-token": create_access_token(user_id, settings, **kwargs)}


@pytest.fixture()
def alice_headers(alice: User, test_settings: Settings) -> dict[str, str]:
    """Return auth headers for alice."""
    return token_headers(alice.id, test_settings)


@pytest.fixture()
def bob_headers(bob: User, test_settings: Settings) -> dict[str, str]:
    """Return auth headers for bob."""
    return token_headers(bob.id, test_settings)


@pytest.fixture()
def expired_headers(alice: User, test_settings: Settings) -> dict[str, str]:
    return token_headers(alice.id, test_settings, expires_delta=timedelta(minutes=-5))


@pytest.fixture()
def alice_post(db_session: Session, alice: User) -> Post:
    """Create a baseline post owned by alice."""
    post = Post(owner_id=alice.id, username=alice.username, text="Alice's first post")
    db_session.add(post)
    db_session.commit()
    db_session.refresh(post)
    return post


@pytest.fixture()
def bob_comment(db_session: Session, alice_post: Post, bob: User) -> Comment:
    """Create a comment by bob on alice's post."""
    comment = Comment(post_id=alice_post.id, owner_id=bob.id, text="Bob's comment on Alice's post")
    db_session.add(comment)
    db_session.commit()
    db_session.refresh(comment)
    return comment


@pytest.fixture()
def count_rows(context: AppContext) -> Callable[[type], int]:
    """Count rows of a model using a fresh session."""

    def _count(model: type) -> int:
        with context.session() as session:
            return session.query(model).count()

    return _count


@pytest.fixture()
def fetch(context: AppContext) -> Callable[[type, Any], Any]:
    """Load a row by primary key using a fresh session."""

    def _fetch(model: type, key: Any) -> Any:
        with context.session() as session:
            return session.get(model, key)

    return _fetch


@pytest.fixture()
def headers_for(test_settings: Settings) -> Callable[..., dict[str, str]]:
    """Return a factory building auth headers for any user id."""

    def _headers(user_id: Any, **kwargs: Any) -> dict[str, str]:
        return token_headers(user_id, test_settings, **kwargs)

    return _headers
