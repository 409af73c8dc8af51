"""Pydantic models used by the try-on router."""

from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_DESCRIPTION = "AI description not available."


class TryOnResponse(BaseModel):
    """Successful try-on result."""

    image: Optional[str] = Field(
        None, description="Generated image as a data URL, or null if none came back"
    )
    description: str = Field(
        DEFAULT_DESCRIPTION, description="Text the model returned alongside the image"
    )


class ErrorResponse(BaseModel):
    """Generic error payload."""

    error: str
    details: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check payload."""

    status: str
    service: str
    version: str
    gemini_configured: bool
