"""Registration and credential checks."""
from __future__ import annotations

import logging

from murmur.core import security
from murmur.core.errors import ApiError, ErrorKind
from murmur.models.user import User
from murmur.repositories.user_repo import UserRepository
from murmur.schemas.user import LoginRequest, RegisterRequest

__all__ = ["register_user", "authenticate_user", "USER_EXISTS", "INVALID_CREDENTIALS"]

logger = logging.getLogger(__name__)

USER_EXISTS = "User already exists"
INVALID_CREDENTIALS = "Invalid credentials"


def register_user(repo: UserRepository, payload: RegisterRequest) -> User:
    """Persist a new user with a hashed password.

    Raises:
        ApiError: If the username or email is already registered.
    """
    if repo.exists(username=payload.username, email=payload.email):
        raise ApiError(ErrorKind.VALIDATION, USER_EXISTS, errors=[{"msg": USER_EXISTS}])

    user = repo.create(
        username=payload.username,
        email=payload.email,
        password_hash=security.hash_password(payload.password),
    )
    logger.info("Registered user %s", user.id)
    return user


def authenticate_user(repo: UserRepository, payload: LoginRequest) -> User:
    """Return the user whose credentials match ``payload``.

    Unknown email and wrong password produce the same error.
    """
    user = repo.get_by_email(payload.email)
    if user is None or not security.verify_password(payload.password, user.password_hash):
        logger.info("Failed login for %s", payload.email)
        raise ApiError(
            ErrorKind.VALIDATION,
            INVALID_CREDENTIALS,
            errors=[{"msg": INVALID_CREDENTIALS}],
        )
    return user
