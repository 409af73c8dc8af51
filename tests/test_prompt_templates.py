"""Tests for the try-on prompt text and generation settings."""

from fitting_room.core.prompt_templates import (
    GENERATION,
    LABELS,
    TRYON_PROMPT,
    GenerationDefaults,
    build_tryon_parts,
)


class TestTryOnPrompt:
    """The instruction block covers what the model must preserve and change."""

    def test_prompt_mentions_each_requirement(self):
        for section in (
            "FACE IDENTITY LOCK",
            "BODY & POSE PRESERVATION",
            "CLOTHING INTEGRATION",
            "BACKGROUND HANDLING",
            "OUTPUT SPECIFICATION",
        ):
            assert section in TRYON_PROMPT

    def test_prompt_asks_for_a_single_photorealistic_image(self):
        assert "single photorealistic image" in TRYON_PROMPT

    def test_labels_name_each_image(self):
        assert LABELS.person.startswith("PERSON IMAGE")
        assert LABELS.garment.startswith("CLOTHING IMAGE")


class TestBuildTryOnParts:

    def test_parts_wrap_both_images(self):
        parts = build_tryon_parts("image/jpeg", "UA==", "image/png", "Rw==")

        assert parts == [
            {"text": LABELS.person},
            {"inline_data": {"mime_type": "image/jpeg", "data": "UA=="}},
            {"text": LABELS.garment},
            {"inline_data": {"mime_type": "image/png", "data": "Rw=="}},
            {"text": TRYON_PROMPT},
        ]


class TestGenerationDefaults:

    def test_low_randomness_settings(self):
        assert GENERATION.temperature == 0.1
        assert GENERATION.top_p == 0.8
        assert GENERATION.top_k == 20

    def test_payload_requests_text_and_image(self):
        payload = GenerationDefaults(temperature=0.5).to_payload()

        assert payload["temperature"] == 0.5
        assert payload["responseModalities"] == ["TEXT", "IMAGE"]
