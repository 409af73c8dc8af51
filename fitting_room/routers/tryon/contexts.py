"""Lightweight dataclasses shared across try-on helpers."""

from dataclasses import dataclass

from fitting_room.core.gemini import TryOnImage

# Field names the browser form posts
PERSON_FIELD = "userImage"
GARMENT_FIELD = "clothingImage"


@dataclass(frozen=True)
class UploadSlot:
    field: str
    label: str
    default_mime: str


PERSON_SLOT = UploadSlot(field=PERSON_FIELD, label="User Image", default_mime="image/jpeg")
GARMENT_SLOT = UploadSlot(field=GARMENT_FIELD, label="Clothing Image", default_mime="image/png")


@dataclass(frozen=True)
class TryOnUploads:
    person: TryOnImage
    garment: TryOnImage
