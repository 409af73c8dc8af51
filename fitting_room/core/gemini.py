import base64
import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

# Import from centralized config
from fitting_room.config import (
    GEMINI_API_BASE,
    GEMINI_API_KEY,
    GEMINI_MODEL,
    GEMINI_TIMEOUT_SECONDS,
    logger,
)
from fitting_room.core.prompt_templates import GENERATION, build_tryon_parts

DEFAULT_RESULT_MIME = "image/png"

logger.info(f"Gemini module initialized with API key: {bool(GEMINI_API_KEY)}")


class GeminiError(Exception):
    """Base error for anything that goes wrong around the Gemini call."""


class GeminiRequestError(GeminiError):
    """The HTTP call to Gemini failed (network error or non-2xx status)."""


class ContentBlockedError(GeminiError):
    """Gemini returned no candidates and reported a block reason."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(
            f"Content generation failed due to safety settings: {reason}"
        )


class EmptyResponseError(GeminiError):
    """Gemini returned no candidates and no explanation."""

    def __init__(self, message: str = "Received an unexpected or empty response from the API."):
        super().__init__(message)


@dataclass(frozen=True)
class TryOnImage:
    """One uploaded image, as raw bytes plus its MIME type."""

    data: bytes
    mime_type: str

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("utf-8")


@dataclass
class TryOnOutput:
    """What was extracted from the model's first candidate."""

    image_data: Optional[str] = None
    image_mime_type: str = DEFAULT_RESULT_MIME
    text: Optional[str] = None

    @property
    def data_url(self) -> Optional[str]:
        if not self.image_data:
            return None
        return f"data:{self.image_mime_type};base64,{self.image_data}"


def build_request_payload(person: TryOnImage, garment: TryOnImage) -> Dict[str, Any]:
    """Build the generateContent body for one person/garment pair."""
    parts = build_tryon_parts(
        person_mime=person.mime_type,
        person_b64=person.to_base64(),
        garment_mime=garment.mime_type,
        garment_b64=garment.to_base64(),
    )
    return {
        "contents": [{"role": "user", "parts": parts}],
        "generationConfig": GENERATION.to_payload(),
    }


def _inline_data(part: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    # Check both camelCase and snake_case formats
    inline = part.get("inlineData") or part.get("inline_data")
    if isinstance(inline, dict) and inline.get("data"):
        return inline
    return None


def parse_generation_response(api_result: Dict[str, Any]) -> TryOnOutput:
    """
    Extract the generated image and description from a generateContent response.

    Only the first candidate is inspected. The first inline-data part becomes
    the image and the first text part becomes the description; later parts of
    either kind are ignored.

    Raises:
        ContentBlockedError: no candidates and a promptFeedback block reason
        EmptyResponseError: no candidates and no block reason
    """
    candidates = api_result.get("candidates") or []
    if not candidates:
        logger.info("No candidates found in the API response.")
        feedback = api_result.get("promptFeedback") or {}
        block_reason = feedback.get("blockReason")
        if block_reason:
            logger.error(f"Content generation blocked: {block_reason}")
            raise ContentBlockedError(block_reason)

        logger.error(
            "Unexpected API response structure: %s",
            json.dumps(api_result, indent=2)[:1000],
        )
        raise EmptyResponseError()

    output = TryOnOutput()
    content = candidates[0].get("content") or {}
    parts = content.get("parts")
    if not parts:
        logger.info("No parts found in the response candidate.")
        return output

    logger.info(f"Number of parts in response: {len(parts)}")

    for part in parts:
        inline = _inline_data(part)
        if inline is not None:
            if output.image_data is None:
                output.image_data = inline["data"]
                output.image_mime_type = (
                    inline.get("mimeType") or inline.get("mime_type") or DEFAULT_RESULT_MIME
                )
                logger.info(
                    f"Image data received, length: {len(output.image_data)}, "
                    f"MIME type: {output.image_mime_type}"
                )
        elif part.get("text"):
            if output.text is None:
                output.text = part["text"]
                logger.info(f"Text response received: {output.text[:100]}")

    return output


async def virtual_tryon(
    person: TryOnImage,
    garment: TryOnImage,
    client: Optional[httpx.AsyncClient] = None,
) -> TryOnOutput:
    """
    Generate a virtual try-on image using Gemini AI.

    Args:
        person: Photo of the person whose identity is preserved
        garment: Photo of the clothing item to put on them
        client: Optional shared HTTP client; a short-lived one is created otherwise

    Returns:
        TryOnOutput with the first generated image and text, either may be None

    Raises:
        GeminiRequestError: If the HTTP call fails
        ContentBlockedError: If the prompt was blocked
        EmptyResponseError: If no candidates came back
    """
    payload = build_request_payload(person, garment)
    url = f"{GEMINI_API_BASE}/models/{GEMINI_MODEL}:generateContent"
    headers = {"Content-Type": "application/json"}
    if GEMINI_API_KEY:
        headers["x-goog-api-key"] = GEMINI_API_KEY

    logger.info(
        f"Calling Gemini model {GEMINI_MODEL}",
        extra={
            "person_mime": person.mime_type,
            "person_bytes": len(person.data),
            "garment_mime": garment.mime_type,
            "garment_bytes": len(garment.data),
        },
    )

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=GEMINI_TIMEOUT_SECONDS) as own_client:
                response = await own_client.post(url, json=payload, headers=headers)
        else:
            response = await client.post(url, json=payload, headers=headers)
        response.raise_for_status()
        api_result = response.json()
    except httpx.HTTPStatusError as exc:
        raise GeminiRequestError(
            f"Gemini API HTTP error: {exc.response.status_code} - {exc.response.text}"
        ) from exc
    except httpx.RequestError as exc:
        raise GeminiRequestError(f"Network error calling Gemini API: {exc}") from exc
    except ValueError as exc:
        raise GeminiRequestError(f"Gemini API returned invalid JSON: {exc}") from exc

    logger.debug(f"Full Gemini API response: {json.dumps(api_result)[:1000]}")

    return parse_generation_response(api_result)


__all__ = [
    "GeminiError",
    "GeminiRequestError",
    "ContentBlockedError",
    "EmptyResponseError",
    "TryOnImage",
    "TryOnOutput",
    "build_request_payload",
    "parse_generation_response",
    "virtual_tryon",
]
