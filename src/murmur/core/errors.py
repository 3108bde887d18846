"""Error taxonomy shared by the store-access layer and the routers.

Repositories raise :class:`StoreError` tagged with a :class:`StoreErrorKind`.
Routers raise :class:`ApiError` tagged with an :class:`ErrorKind`. The two are
joined by :data:`STORE_ERROR_KINDS`, which covers every store error kind, and
:data:`STATUS_BY_KIND`, which fixes the HTTP status of every API error kind.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import status

SERVER_ERROR_MESSAGE = "Server error"


class ErrorKind(str, Enum):
    """Failure categories surfaced to API callers."""

    UNAUTHENTICATED = "unauthenticated"
    INVALID_CREDENTIAL = "invalid_credential"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    SERVER = "server"


# Ownership violations deliberately share 401 with authentication failures.
STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INVALID_CREDENTIAL: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.SERVER: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class StoreErrorKind(str, Enum):
    """Failure categories produced by the store-access layer."""

    MALFORMED_ID = "malformed_id"
    CONFLICT = "conflict"
    UNAVAILABLE = "unavailable"


STORE_ERROR_KINDS: dict[StoreErrorKind, ErrorKind] = {
    StoreErrorKind.MALFORMED_ID: ErrorKind.NOT_FOUND,
    StoreErrorKind.CONFLICT: ErrorKind.VALIDATION,
    StoreErrorKind.UNAVAILABLE: ErrorKind.SERVER,
}


class ApiError(Exception):
    """An error that maps directly onto an HTTP response.

    Args:
        kind: Failure category, which decides the status code.
        message: Human-readable message returned to the caller.
        errors: Optional field-level errors for validation failures.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.errors = errors

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]

    def body(self) -> dict[str, Any]:
        """Return the JSON body for this error."""
        if self.kind is ErrorKind.SERVER:
            return {"msg": SERVER_ERROR_MESSAGE}
        if self.errors is not None:
            return {"errors": self.errors}
        if self.kind is ErrorKind.VALIDATION:
            return {"error": self.message}
        return {"msg": self.message}

    @classmethod
    def not_found(cls, entity: str) -> ApiError:
        return cls(ErrorKind.NOT_FOUND, f"{entity} not found")

    @classmethod
    def field(cls, param: str, message: str, location: str = "body") -> ApiError:
        """Build a validation error reporting a single field."""
        return cls(
            ErrorKind.VALIDATION,
            message,
            errors=[{"msg": message, "param": param, "location": location}],
        )


class StoreError(Exception):
    """A failure raised by a repository.

    Args:
        kind: Failure category.
        entity: Name of the collection the operation targeted.
        detail: Internal description; logged, never returned to callers.
    """

    def __init__(self, kind: StoreErrorKind, entity: str, detail: str | None = None) -> None:
        super().__init__(detail or f"{entity}: {kind.value}")
        self.kind = kind
        self.entity = entity
        self.detail = detail


def to_api_error(error: StoreError) -> ApiError:
    """Translate a store failure into the error reported to the caller."""
    kind = STORE_ERROR_KINDS[error.kind]
    if kind is ErrorKind.NOT_FOUND:
        return ApiError.not_found(error.entity)
    if kind is ErrorKind.VALIDATION:
        return ApiError.field(error.entity.lower(), f"{error.entity} already exists")
    return ApiError(ErrorKind.SERVER, SERVER_ERROR_MESSAGE)


# Friendlier messages for request fields that fail schema validation.
FIELD_MESSAGES: dict[str, str] = {
    "text": "Text is required",
    "username": "Name is required",
    "email": "Please include a valid email",
    "password": "Please enter a password with 6 or more characters",
}
