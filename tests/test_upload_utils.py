"""Tests for upload helpers used by the try-on router."""

import pytest

from fitting_room.routers.tryon.utils import UploadValidationError, resolve_mime_type


class TestResolveMimeType:

    @pytest.mark.parametrize("content_type", [None, "", "application/octet-stream"])
    def test_missing_or_generic_type_uses_default(self, content_type):
        assert resolve_mime_type(content_type, "image/jpeg") == "image/jpeg"

    def test_image_type_is_kept_and_normalized(self):
        assert resolve_mime_type("Image/WEBP; q=1", "image/png") == "image/webp"

    def test_non_image_type_is_rejected(self):
        with pytest.raises(UploadValidationError) as exc_info:
            resolve_mime_type("application/pdf", "image/png")

        assert "application/pdf" in exc_info.value.details
