"""Image upload endpoint."""

from fastapi import APIRouter, File, UploadFile
from pydantic import BaseModel
from starlette.datastructures import UploadFile as StarletteUploadFile

from murmur.api.dependencies import ContextDep
from murmur.core.errors import ApiError, ErrorKind
from murmur.services.uploads import save_upload

router = APIRouter(prefix="/upload", tags=["upload"])

NO_FILE = "No file provided"


class UploadResponse(BaseModel):
    """Where the uploaded file was stored."""

    path: str


@router.post("", response_model=UploadResponse)
def upload_image(
    context: ContextDep,
    image: UploadFile | str | None = File(None),
) -> UploadResponse:
    """Store the multipart ``image`` field and return its path.

    A plain text value under ``image`` counts as no file. The path is opaque
    here; clients attach it to a post in a later request.
    """
    # Validation hands back the Starlette instance, not FastAPI's subclass.
    if not isinstance(image, StarletteUploadFile) or not image.filename:
        raise ApiError(ErrorKind.VALIDATION, NO_FILE)
    stored = save_upload(image.file, image.filename, context.upload_dir)
    return UploadResponse(path=stored.as_posix())
