"""Utility helpers for the try-on router."""

from typing import Any, Optional

from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from fitting_room.config import logger
from fitting_room.core.gemini import TryOnImage

from .contexts import UploadSlot
from .models import ErrorResponse

GENERIC_MIME_TYPES = {"application/octet-stream", "binary/octet-stream"}


class UploadValidationError(ValueError):
    """An uploaded file cannot be sent to the model."""

    def __init__(self, message: str, details: Optional[str] = None):
        self.message = message
        self.details = details
        super().__init__(message)


def is_file_upload(value: Any) -> bool:
    """Form values can be plain strings; only real file parts count."""
    return isinstance(value, UploadFile)


def resolve_mime_type(content_type: Optional[str], default: str) -> str:
    """Pick the MIME type sent to the model for an upload."""
    if not content_type:
        return default

    mime = content_type.split(";", 1)[0].strip().lower()
    if not mime or mime in GENERIC_MIME_TYPES:
        return default
    if not mime.startswith("image/"):
        raise UploadValidationError(
            "Unsupported file type. Please upload an image.",
            details=f"Received content type: {mime}",
        )
    return mime


async def read_image_upload(
    upload: UploadFile, slot: UploadSlot, max_bytes: int
) -> TryOnImage:
    """Read an uploaded image into memory, enforcing size and type limits."""
    mime_type = resolve_mime_type(upload.content_type, slot.default_mime)

    # Read one byte past the cap so oversized files are detected without
    # loading the whole thing
    data = await upload.read(max_bytes + 1)
    if not data:
        raise UploadValidationError(f"{slot.label} is empty")
    if len(data) > max_bytes:
        raise UploadValidationError(
            f"File size too large. Please use images smaller than {max_bytes // (1024 * 1024)}MB.",
            details=f"{slot.field} exceeds {max_bytes} bytes",
        )

    logger.info(f"{slot.label}: {mime_type}, size: {len(data)}")
    return TryOnImage(data=data, mime_type=mime_type)


def error_response(
    status_code: int, error: str, details: Optional[str] = None
) -> JSONResponse:
    """Render an ErrorResponse with the given status code."""
    payload = ErrorResponse(error=error, details=details)
    return JSONResponse(
        status_code=status_code, content=payload.model_dump(exclude_none=True)
    )
