"""Storage of uploaded images on the local filesystem."""
from __future__ import annotations

import logging
import shutil
import time
from pathlib import Path
from typing import BinaryIO

logger = logging.getLogger(__name__)

MILLISECONDS_PER_SECOND = 1000


def stored_name(original_filename: str, now: float | None = None) -> str:
    """Return ``<epoch-ms>-<basename>`` for an uploaded file.

    Only the final path component of the client-supplied name is kept.
    """
    timestamp = int((time.time() if now is None else now) * MILLISECONDS_PER_SECOND)
    basename = Path(original_filename.replace("\\", "/")).name or "upload"
    return f"{timestamp}-{basename}"


def save_upload(source: BinaryIO, original_filename: str, upload_dir: Path) -> Path:
    """Copy ``source`` into ``upload_dir`` and return the stored path."""
    upload_dir.mkdir(parents=True, exist_ok=True)
    destination = upload_dir / stored_name(original_filename)
    with destination.open("wb") as out:
        shutil.copyfileobj(source, out)
    logger.info("Stored upload %s", destination)
    return destination
