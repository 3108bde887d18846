"""Shared API dependencies for authentication and store access."""

import logging
import uuid
from collections.abc import Generator
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader
from sqlalchemy.orm import Session

from murmur.core.context import AppContext
from murmur.core.errors import ApiError, ErrorKind
from murmur.core.security import TokenError, decode_access_token
from murmur.models import User
from murmur.repositories.comment_repo import CommentRepository
from murmur.repositories.post_repo import PostRepository
from murmur.repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)

TOKEN_HEADER = "x-auth-token"
NO_TOKEN = "No token, authorization denied"
TOKEN_NOT_VALID = "Token is not valid"
USER_NOT_FOUND = "User not found"

# auto_error is off so a missing header gets this API's own 401 body.
token_header = APIKeyHeader(name=TOKEN_HEADER, auto_error=False)


@dataclass(frozen=True)
class Identity:
    """Caller identity resolved from a verified token."""

    id: uuid.UUID


def get_context(request: Request) -> AppContext:
    """Return the application context the app was built with."""
    context: AppContext = request.app.state.context
    return context


ContextDep = Annotated[AppContext, Depends(get_context)]


def get_db(context: ContextDep) -> Generator[Session, None, None]:
    """Yield a database session for dependency injection."""
    db = context.session()
    try:
        yield db
    finally:
        db.close()


# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_current_identity(
    context: ContextDep,
    token: Annotated[str | None, Depends(token_header)],
) -> Identity:
    """Verify the ``x-auth-token`` header and return the caller identity.

    No store lookup happens here; the result depends only on the token and
    the signing secret.

    Raises:
        ApiError: ``UNAUTHENTICATED`` when the header is missing,
            ``INVALID_CREDENTIAL`` when the token fails verification.
    """
    if not token:
        raise ApiError(ErrorKind.UNAUTHENTICATED, NO_TOKEN)
    try:
        user_id = decode_access_token(token, context.settings)
    except TokenError as err:
        logger.warning("Rejected token: %s", err)
        raise ApiError(ErrorKind.INVALID_CREDENTIAL, TOKEN_NOT_VALID) from err
    return Identity(id=user_id)


# Type alias for current identity dependency
CurrentIdentityDep = Annotated[Identity, Depends(get_current_identity)]


def get_post_repo(db: SessionDep) -> PostRepository:
    return PostRepository(db)


def get_comment_repo(db: SessionDep) -> CommentRepository:
    return CommentRepository(db)


def get_user_repo(db: SessionDep) -> UserRepository:
    return UserRepository(db)


PostRepoDep = Annotated[PostRepository, Depends(get_post_repo)]
CommentRepoDep = Annotated[CommentRepository, Depends(get_comment_repo)]
UserRepoDep = Annotated[UserRepository, Depends(get_user_repo)]


def get_current_user(identity: CurrentIdentityDep, users: UserRepoDep) -> User:
    """Load the caller's user record.

    Used by routes that create content, so that every new post or comment
    references an existing user.
    """
    user = users.get_by_id(identity.id)
    if user is None:
        raise ApiError(ErrorKind.INVALID_CREDENTIAL, USER_NOT_FOUND)
    return user


CurrentUserDep = Annotated[User, Depends(get_current_user)]
