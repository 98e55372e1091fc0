"""Unit tests for TryOnPromptComposer - request composition."""

import pytest

from vogue_tryon.agents import DEFAULT_STYLING, TryOnPromptComposer
from vogue_tryon.models import ImageAsset


def _asset(data_uri: str) -> ImageAsset:
    return ImageAsset(id="abc12345", data_uri=data_uri, preview_url=data_uri, content_type="image/png")


class TestBuildPrompt:
    """Tests for the fixed try-on prompt."""

    @pytest.fixture
    def composer(self):
        return TryOnPromptComposer()

    def test_labels_images(self, composer):
        prompt = composer.build_prompt()

        assert "Image 1 is the PERSON" in prompt
        assert "Image 2 is the OUTFIT" in prompt

    def test_preserves_identity_and_scene(self, composer):
        prompt = composer.build_prompt().lower()

        assert "pose" in prompt
        assert "body shape" in prompt
        assert "facial features" in prompt
        assert "lighting" in prompt
        assert "shadows" in prompt
        assert "background" in prompt

    def test_transfers_outfit_details(self, composer):
        prompt = composer.build_prompt().lower()

        assert "texture" in prompt
        assert "fabric" in prompt
        assert "accessories" in prompt
        assert "natural and realistic" in prompt

    def test_default_styling_is_last_requirement(self, composer):
        prompt = composer.build_prompt()

        assert prompt.rstrip().endswith(f"5. {DEFAULT_STYLING}")

    def test_user_styling_replaces_default(self, composer):
        prompt = composer.build_prompt("Tuck the shirt in and roll up the sleeves.")

        assert prompt.rstrip().endswith("5. Tuck the shirt in and roll up the sleeves.")
        assert DEFAULT_STYLING not in prompt

    @pytest.mark.parametrize("blank", [None, "", "   "])
    def test_blank_styling_uses_default(self, composer, blank):
        assert DEFAULT_STYLING in composer.build_prompt(blank)


class TestCompose:
    """Tests for request composition."""

    def test_decodes_payloads_in_order(self):
        composer = TryOnPromptComposer()
        subject = _asset("data:image/png;base64,UEVSU09O")   # "PERSON"
        garment = _asset("data:image/webp;base64,T1VURklU")  # "OUTFIT"

        request = composer.compose(subject, garment, "casual")

        assert request.subject.data == b"PERSON"
        assert request.subject.media_type == "image/png"
        assert request.garment.data == b"OUTFIT"
        assert request.garment.media_type == "image/webp"
        assert request.instructions == "casual"
        assert request.prompt.rstrip().endswith("5. casual")

    def test_unparseable_prefix_defaults_to_jpeg(self):
        composer = TryOnPromptComposer()
        bare = _asset("UEVSU09O")

        request = composer.compose(bare, bare)

        assert request.subject.media_type == "image/jpeg"
        assert request.subject.data == b"PERSON"

    def test_configurable_default_media_type(self):
        composer = TryOnPromptComposer(default_media_type="image/png")
        bare = _asset("UEVSU09O")

        request = composer.compose(bare, bare)

        assert request.garment.media_type == "image/png"
