"""Prompt text and generation settings for the Gemini virtual try-on flow."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple


# --- GENERATION PROMPT ---

TRYON_PROMPT = """VIRTUAL TRY-ON TASK:

INPUT IMAGES:
1. PERSON IMAGE: Contains the target person whose identity must be PERFECTLY preserved
2. CLOTHING IMAGE: Contains the clothing item to be virtually worn

CRITICAL REQUIREMENTS (NON-NEGOTIABLE):

FACE IDENTITY LOCK (ABSOLUTE PRIORITY):
- The person's face, facial features, skin tone, and expression MUST remain 100% identical to the input person image
- DO NOT change, modify, or reinterpret ANY facial characteristics
- DO NOT blend or mix features from the model wearing the clothing
- Preserve the exact eye color, nose shape, lip shape, jawline, and all unique facial features
- Keep distinctive features (freckles, moles, scars) exactly as they are

BODY & POSE PRESERVATION:
- Keep the exact same body pose and positioning as the input person image
- Maintain the same body proportions and build
- Preserve hair style and color exactly as shown in the person image
- Keep any visible accessories (jewelry, watches, etc.) from the person image

CLOTHING INTEGRATION:
- Extract ONLY the clothing item from the clothing image (ignore any model wearing it)
- Apply the exact colors, patterns, textures, and style of the clothing
- Replace only the corresponding clothing on the person, with proper fit and realistic draping
- Handle occlusion naturally where clothing covers the person

BACKGROUND HANDLING:
- Remove the original backgrounds from both input images
- Create a clean, neutral background (studio-like or simple environment)
- Use lighting that matches both the person and the clothing naturally

OUTPUT SPECIFICATION:
Generate a single photorealistic image showing the EXACT same person from the person image wearing the clothing item, with perfect facial identity preservation and realistic clothing integration.

WHAT NOT TO DO:
- Do not alter the person's face in any way
- Do not use facial features from the clothing image model
- Do not change the person's hair, skin tone, or body structure
- Do not modify the clothing colors or patterns
- Do not create unrealistic proportions or poses
"""


@dataclass(frozen=True)
class PromptLabels:
    """Text parts placed in front of each inline image."""

    person: str = "PERSON IMAGE (preserve this person's identity exactly):"
    garment: str = "CLOTHING IMAGE (extract only the clothing item):"


@dataclass(frozen=True)
class GenerationDefaults:
    """Fixed sampling settings for try-on generation."""

    temperature: float = 0.1
    top_p: float = 0.8
    top_k: int = 20
    response_modalities: Tuple[str, ...] = field(default=("TEXT", "IMAGE"))

    def to_payload(self) -> Dict[str, Any]:
        return {
            "temperature": self.temperature,
            "topP": self.top_p,
            "topK": self.top_k,
            "responseModalities": list(self.response_modalities),
        }


LABELS = PromptLabels()
GENERATION = GenerationDefaults()


def build_tryon_parts(
    person_mime: str,
    person_b64: str,
    garment_mime: str,
    garment_b64: str,
) -> List[Dict[str, Any]]:
    """Assemble the content parts in the order the model expects.

    Person label, person image, garment label, garment image, then the
    instruction block.
    """
    return [
        {"text": LABELS.person},
        {"inline_data": {"mime_type": person_mime, "data": person_b64}},
        {"text": LABELS.garment},
        {"inline_data": {"mime_type": garment_mime, "data": garment_b64}},
        {"text": TRYON_PROMPT},
    ]


__all__ = [
    "TRYON_PROMPT",
    "LABELS",
    "GENERATION",
    "PromptLabels",
    "GenerationDefaults",
    "build_tryon_parts",
]
