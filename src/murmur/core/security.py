"""Password hashing and access-token helpers."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from murmur.core.settings import Settings

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class TokenError(ValueError):
    """Raised when an access token cannot be verified."""


def hash_password(password: str) -> str:
    """Return a salted hash suitable for storage."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plain password against its stored hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    user_id: uuid.UUID,
    settings: Settings,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed JWT that embeds the user's id as its subject."""
    expire = datetime.now(UTC) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode: dict[str, object] = {"sub": str(user_id), "exp": expire}
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str, settings: Settings) -> uuid.UUID:
    """Verify a token and return the user id it carries.

    Raises:
        TokenError: If the signature, expiry or subject claim is invalid.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as err:
        raise TokenError(str(err)) from err

    subject = payload.get("sub")
    if not isinstance(subject, str):
        raise TokenError("Token has no subject")
    try:
        return uuid.UUID(subject)
    except ValueError as err:
        raise TokenError("Token subject is not a user id") from err
