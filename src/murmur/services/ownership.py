"""Load-then-authorize helpers shared by the post and comment routers."""
from __future__ import annotations

import logging
import uuid
from typing import Protocol, TypeVar

from murmur.core.errors import ApiError, ErrorKind

logger = logging.getLogger(__name__)

NOT_AUTHORIZED = "User not authorized"


class Owned(Protocol):
    id: uuid.UUID
    owner_id: uuid.UUID


T = TypeVar("T")
OwnedT = TypeVar("OwnedT", bound=Owned)


def require_found(entity: T | None, name: str) -> T:
    """Return ``entity`` or fail with a not-found error naming it."""
    if entity is None:
        raise ApiError.not_found(name)
    return entity


def require_owner(entity: OwnedT, caller_id: uuid.UUID, name: str) -> OwnedT:
    """Fail unless ``caller_id`` owns ``entity``.

    Ownership violations are reported with 401, the same code as a failed
    authentication.
    """
    if entity.owner_id != caller_id:
        logger.info("User %s denied access to %s %s", caller_id, name, entity.id)
        raise ApiError(ErrorKind.FORBIDDEN, NOT_AUTHORIZED)
    return entity


def load_owned(entity: OwnedT | None, caller_id: uuid.UUID, name: str) -> OwnedT:
    """Run the load and authorize steps in order."""
    return require_owner(require_found(entity, name), caller_id, name)
