"""FastAPI router for the virtual try-on endpoint."""

from fastapi import APIRouter, Request

from fitting_room import __version__
from fitting_room.config import GEMINI_API_KEY, MAX_UPLOAD_BYTES, logger
from fitting_room.core.gemini import ContentBlockedError, virtual_tryon

from .contexts import GARMENT_SLOT, PERSON_SLOT, TryOnUploads
from .models import DEFAULT_DESCRIPTION, ErrorResponse, HealthResponse, TryOnResponse
from .utils import (
    UploadValidationError,
    error_response,
    is_file_upload,
    read_image_upload,
)

router = APIRouter(prefix="/api", tags=["Virtual Try-On"])


@router.post(
    "/tryon",
    response_model=TryOnResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def create_virtual_tryon(request: Request):
    """Put the clothing from one uploaded image onto the person in the other.

    Expects a multipart form with ``userImage`` and ``clothingImage`` files.
    """
    logger.info("Virtual try-on request received")

    try:
        form = await request.form()
    except Exception as exc:
        logger.error("Error parsing form data request body", exc_info=True)
        return error_response(
            400, "Invalid request body: Failed to parse form data.", str(exc)
        )

    try:
        person_upload = form.get(PERSON_SLOT.field)
        garment_upload = form.get(GARMENT_SLOT.field)

        if not is_file_upload(person_upload) or not is_file_upload(garment_upload):
            logger.warning(
                "Try-on request missing image fields",
                extra={
                    "has_user_image": is_file_upload(person_upload),
                    "has_clothing_image": is_file_upload(garment_upload),
                },
            )
            return error_response(
                400, "Both userImage and clothingImage files are required"
            )

        try:
            uploads = TryOnUploads(
                person=await read_image_upload(
                    person_upload, PERSON_SLOT, MAX_UPLOAD_BYTES
                ),
                garment=await read_image_upload(
                    garment_upload, GARMENT_SLOT, MAX_UPLOAD_BYTES
                ),
            )
        except UploadValidationError as exc:
            logger.warning(
                "Rejected try-on upload",
                extra={"reason": exc.message, "details": exc.details},
            )
            return error_response(400, exc.message, exc.details)

        result = await virtual_tryon(uploads.person, uploads.garment)

        return TryOnResponse(
            image=result.data_url,
            description=result.text or DEFAULT_DESCRIPTION,
        )

    except ContentBlockedError as exc:
        logger.error(
            "Try-on generation blocked", extra={"block_reason": exc.reason}
        )
        return error_response(
            500,
            f"Content generation blocked by safety settings: {exc.reason}",
            str(exc),
        )

    except Exception as exc:
        logger.error("Error processing virtual try-on request", exc_info=True)
        return error_response(
            500, "Failed to process virtual try-on request", str(exc)
        )

    finally:
        await form.close()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Simple health check endpoint."""

    return HealthResponse(
        status="healthy",
        service="virtual-try-on",
        version=__version__,
        gemini_configured=bool(GEMINI_API_KEY),
    )
