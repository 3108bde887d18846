"""Shared helpers for repositories."""
from __future__ import annotations

import logging
import uuid
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from murmur.core.errors import StoreError, StoreErrorKind

__all__ = ["parse_id", "store_errors"]

logger = logging.getLogger(__name__)


def parse_id(raw: str | uuid.UUID, entity: str) -> uuid.UUID:
    """Return ``raw`` as a UUID.

    Raises:
        StoreError: Tagged ``MALFORMED_ID`` when ``raw`` is not a valid id.
    """
    if isinstance(raw, uuid.UUID):
        return raw
    try:
        return uuid.UUID(raw)
    except (ValueError, AttributeError, TypeError) as err:
        raise StoreError(
            StoreErrorKind.MALFORMED_ID,
            entity,
            f"Cast to id failed for value {raw!r}",
        ) from err


@contextmanager
def store_errors(session: Session, entity: str) -> Iterator[None]:
    """Translate SQLAlchemy failures into tagged store errors.

    The session is rolled back so it stays usable for the rest of the request.
    """
    try:
        yield
    except IntegrityError as err:
        session.rollback()
        logger.info("Integrity violation on %s: %s", entity, err.orig)
        raise StoreError(StoreErrorKind.CONFLICT, entity, str(err.orig)) from err
    except SQLAlchemyError as err:
        session.rollback()
        logger.error("Store failure on %s", entity, exc_info=True)
        raise StoreError(StoreErrorKind.UNAVAILABLE, entity, str(err)) from err
