# Test fixtures and configuration
import os

import pytest

# Must be set before fitting_room.config is imported
os.environ.setdefault("GEMINI_API_KEY", "test-key")

from fastapi.testclient import TestClient  # noqa: E402

from fitting_room.main import app  # noqa: E402


@pytest.fixture
def minimal_png_bytes():
    """Minimal valid PNG image bytes."""
    return bytes([
        0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A,  # PNG signature
        0x00, 0x00, 0x00, 0x0D, 0x49, 0x48, 0x44, 0x52,  # IHDR chunk
        0x00, 0x00, 0x00, 0x01, 0x00, 0x00, 0x00, 0x01,  # 1x1 dimensions
        0x08, 0x02, 0x00, 0x00, 0x00, 0x90, 0x77, 0x53,
        0xDE, 0x00, 0x00, 0x00, 0x0C, 0x49, 0x44, 0x41,  # IDAT chunk
        0x54, 0x08, 0xD7, 0x63, 0xF8, 0xCF, 0xC0, 0x00,
        0x00, 0x00, 0x03, 0x00, 0x01, 0x00, 0x05, 0xFE,
        0xD4, 0xAA, 0x00, 0x00, 0x00, 0x00, 0x49, 0x45,  # IEND chunk
        0x4E, 0x44, 0xAE, 0x42, 0x60, 0x82
    ])


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def tryon_files(minimal_png_bytes):
    """Multipart files for a valid try-on submission."""
    return {
        "userImage": ("me.jpg", b"\xff\xd8\xff\xe0person", "image/jpeg"),
        "clothingImage": ("shirt.png", minimal_png_bytes, "image/png"),
    }
