"""AI virtual try-on web app backed by Gemini image generation."""

__version__ = "1.0.0"
