import logging
import time
import uuid
from io import BytesIO
from pathlib import Path

from fastapi import APIRouter, File, UploadFile, status
from PIL import Image, UnidentifiedImageError

from photoalbum.errors import UploadFailure
from photoalbum.utils.config import settings


logger = logging.getLogger(__name__)
router = APIRouter(tags=["upload"])


ALLOWED_MIME = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
    "image/gif": ".gif",
}
PUBLIC_PREFIX = "/uploaded"


def unique_filename(original: str, content_type: str | None) -> str:
    ext = Path(original or "").suffix.lower() or ALLOWED_MIME.get(content_type or "", "")
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex}{ext}"


@router.post("/upload")
def upload_file(file: UploadFile | None = File(None, description="Image file")):
    if file is None:
        raise UploadFailure("No file provided")
    if file.content_type not in ALLOWED_MIME:
        raise UploadFailure(
            f"Unsupported content type: {file.content_type}",
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE)

    contents = file.file.read()
    if not contents:
        raise UploadFailure("Uploaded file is empty")
    if len(contents) > settings.MAX_UPLOAD_BYTES:
        raise UploadFailure(
            f"File too large ({settings.MAX_UPLOAD_BYTES} bytes max)",
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE)

    try:
        with Image.open(BytesIO(contents)) as im:
            width, height = im.size
    except UnidentifiedImageError as exc:
        raise UploadFailure("Uploaded file is not a readable image") from exc

    filename = unique_filename(file.filename or "", file.content_type)
    upload_dir = Path(settings.UPLOAD_DIR)
    try:
        upload_dir.mkdir(parents=True, exist_ok=True)
        (upload_dir / filename).write_bytes(contents)
    except OSError as exc:
        logger.exception("Failed to store upload %s", filename)
        raise UploadFailure(
            "Failed to upload file",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR) from exc

    logger.info("Stored upload %s (%d bytes)", filename, len(contents))
    return {
        "success": True,
        "filename": filename,
        "originalFilename": file.filename,
        "size": len(contents),
        "filepath": f"{PUBLIC_PREFIX}/{filename}",
        "width": width,
        "height": height,
    }
