"""Populate the configured store with a small set of sample data."""
from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import dataclass

from murmur.core.context import AppContext, build_context
from murmur.core.errors import StoreError
from murmur.core.security import hash_password
from murmur.core.settings import Settings
from murmur.db.session import create_tables
from murmur.repositories.comment_repo import CommentRepository
from murmur.repositories.post_repo import PostRepository
from murmur.repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)

SAMPLE_PASSWORD = "password123"
# Seeding never signs tokens; this only satisfies the required setting.
UNUSED_SECRET = "unused-by-seed"


@dataclass(frozen=True)
class SampleUser:
    username: str
    email: str


@dataclass(frozen=True)
class SamplePost:
    user_index: int
    text: str
    image: str


@dataclass(frozen=True)
class SampleComment:
    post_index: int
    user_index: int
    text: str


USERS = [
    SampleUser("Alice", "alice@example.com"),
    SampleUser("Bob", "bob@example.com"),
]

POSTS = [
    SamplePost(
        0,
        "Alice's first post",
        "https://img.freepik.com/premium-photo/cant-live-without-sport-vertical-photo-"
        "strong-disabled-woman-sportswear-is-running-outdoors_386167-12681.jpg?w=2000",
    ),
    SamplePost(
        1,
        "Bob's first post",
        "https://thumbs.dreamstime.com/b/sports-basketball-young-teenager-blue-tracksuit-"
        "throws-jump-ball-basket-sky-vertical-163705831.jpg",
    ),
]

COMMENTS = [
    SampleComment(0, 0, "Alice's comment on her own post"),
    SampleComment(0, 1, "Bob's comment on Alice's post"),
]


def populate(context: AppContext) -> dict[str, int]:
    """Clear users, posts and comments, then insert the sample data.

    Returns:
        Number of rows created per collection.
    """
    create_tables(context.engine)
    with context.session() as session:
        users = UserRepository(session)
        posts = PostRepository(session)
        comments = CommentRepository(session)

        comments.delete_all()
        posts.delete_all()
        users.delete_all()

        password_hash = hash_password(SAMPLE_PASSWORD)
        created_users = [
            users.create(username=u.username, email=u.email, password_hash=password_hash)
            for u in USERS
        ]
        created_posts = [
            posts.create(
                owner_id=created_users[p.user_index].id,
                text=p.text,
                image=p.image,
            )
            for p in POSTS
        ]
        created_comments = [
            comments.create(
                post_id=created_posts[c.post_index].id,
                owner_id=created_users[c.user_index].id,
                text=c.text,
            )
            for c in COMMENTS
        ]

    return {
        "users": len(created_users),
        "posts": len(created_posts),
        "comments": len(created_comments),
    }


def load_settings(url: str | None = None) -> Settings:
    """Read the API settings, overriding the store URL when given.

    ``JWT_SECRET`` may be unset.
    """
    overrides: dict[str, str] = {}
    if url:
        overrides["DATABASE_URL"] = url
    if not os.environ.get("JWT_SECRET"):
        overrides["JWT_SECRET"] = UNUSED_SECRET
    return Settings(**overrides)  # type: ignore[arg-type]


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Reset the store and load sample data")
    parser.add_argument(
        "--url",
        default=None,
        help="Override database URL (defaults to DATABASE_URL)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s [%(name)s] %(message)s")
    context = build_context(load_settings(args.url))
    try:
        counts = populate(context)
    except StoreError as exc:
        logger.error("Seeding failed: %s", exc)
        sys.exit(1)
    finally:
        context.dispose()
    logger.info("Data populated successfully: %s", counts)


if __name__ == "__main__":
    main()
