"""Async controller mirroring the state and behavior of the try-on page form.

The browser page in ``fitting_room/static`` drives ``POST /api/tryon`` the same
way; this module lets the flow be scripted and tested from Python.
"""

from __future__ import annotations

import asyncio
import base64
import mimetypes
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

import httpx

from fitting_room.config import logger

MAX_FILE_BYTES = 10 * 1024 * 1024

FILE_TOO_LARGE_ERROR = "File size too large. Please use images smaller than 10MB."
MISSING_FILES_ERROR = "Please upload both your photo and a clothing item image."
NO_IMAGE_ERROR = (
    "API did not return a generated image. "
    "This might be due to safety filters or processing issues."
)
GENERIC_ERROR = "An error occurred during image generation."
SAFETY_HINT = "Try using different images or ensure they meet content guidelines."


class Slot(str, Enum):
    """The two image pickers, valued by the form field they post as."""

    USER = "userImage"
    CLOTHING = "clothingImage"


@dataclass(frozen=True)
class SelectedFile:
    """A file picked by the user, held in memory."""

    name: str
    data: bytes
    mime_type: str = "application/octet-stream"

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "SelectedFile":
        path = Path(path)
        mime_type, _ = mimetypes.guess_type(path.name)
        return cls(
            name=path.name,
            data=path.read_bytes(),
            mime_type=mime_type or "application/octet-stream",
        )


class SubmissionError(Exception):
    """A submission finished without a result image to show."""


def to_data_url(file: SelectedFile) -> str:
    encoded = base64.b64encode(file.data).decode("utf-8")
    return f"data:{file.mime_type};base64,{encoded}"


class TryOnFormController:
    """
    Holds the try-on form state: idle -> submitting -> success/error.

    Args:
        base_url: Where the app is served
        transport: Optional httpx transport, e.g. ``httpx.ASGITransport(app)``
        timeout: Request timeout in seconds, None waits indefinitely
    """

    endpoint = "/api/tryon"

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = base_url
        self.transport = transport
        self.timeout = timeout
        self._clear()

    def _clear(self) -> None:
        self.user_image: Optional[SelectedFile] = None
        self.clothing_image: Optional[SelectedFile] = None
        self.user_image_preview: Optional[str] = None
        self.clothing_image_preview: Optional[str] = None
        # Picker values, i.e. the file name shown by each file input
        self.user_picker: Optional[str] = None
        self.clothing_picker: Optional[str] = None
        self.result_image_url: Optional[str] = None
        self.is_loading = False
        self.error: Optional[str] = None

    @property
    def can_submit(self) -> bool:
        return (
            not self.is_loading
            and self.user_image is not None
            and self.clothing_image is not None
        )

    @property
    def safety_hint(self) -> Optional[str]:
        if self.error and "safety" in self.error:
            return SAFETY_HINT
        return None

    async def select_file(self, slot: Slot, file: Optional[SelectedFile]) -> None:
        """Store a picked file and compute its preview; None clears the slot."""
        slot = Slot(slot)
        attr = "user" if slot is Slot.USER else "clothing"

        if file is None:
            setattr(self, f"{attr}_image", None)
            setattr(self, f"{attr}_image_preview", None)
            setattr(self, f"{attr}_picker", None)
            return

        if file.size >= MAX_FILE_BYTES:
            logger.warning(
                "Rejected oversized file",
                extra={"slot": slot.value, "file_name": file.name, "size": file.size},
            )
            self.error = FILE_TOO_LARGE_ERROR
            return

        setattr(self, f"{attr}_image", file)
        setattr(self, f"{attr}_picker", file.name)
        self.error = None
        preview = await asyncio.to_thread(to_data_url, file)
        # A newer selection or a reset may have landed while encoding
        if getattr(self, f"{attr}_image") is file:
            setattr(self, f"{attr}_image_preview", preview)

    async def submit(self) -> bool:
        """Post both images to the app. Returns True when a result image is shown."""
        if self.user_image is None or self.clothing_image is None:
            self.error = MISSING_FILES_ERROR
            return False

        self.is_loading = True
        self.error = None
        self.result_image_url = None

        files = {
            Slot.USER.value: (
                self.user_image.name,
                self.user_image.data,
                self.user_image.mime_type,
            ),
            Slot.CLOTHING.value: (
                self.clothing_image.name,
                self.clothing_image.data,
                self.clothing_image.mime_type,
            ),
        }

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                transport=self.transport,
                timeout=self.timeout,
            ) as client:
                response = await client.post(self.endpoint, files=files)

            try:
                result = response.json()
            except ValueError:
                result = {}
            if not isinstance(result, dict):
                result = {}

            if not response.is_success:
                raise SubmissionError(
                    result.get("error") or f"API Error: {response.reason_phrase}"
                )

            if not result.get("image"):
                logger.info(
                    "API response had no image",
                    extra={"description": result.get("description")},
                )
                raise SubmissionError(NO_IMAGE_ERROR)

            self.result_image_url = result["image"]
            return True

        except SubmissionError as exc:
            logger.error(f"Submission error: {exc}")
            self.error = str(exc)
        except httpx.HTTPError as exc:
            logger.error(f"Submission error: {exc}")
            self.error = str(exc) or GENERIC_ERROR
        finally:
            self.is_loading = False

        self.result_image_url = None
        return False

    def reset(self) -> None:
        """Clear selections, previews, result, error, and both pickers."""
        self._clear()
