"""Tests for image validation and alt text providers."""

import base64
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from alt_text_generator.config import AppConfig
from alt_text_generator.errors import UpstreamError, ValidationError
from alt_text_generator.generation import (
    AltTextGenerator,
    ImageUpload,
    MockAltTextProvider,
    OpenAIAltTextProvider,
    MOCK_RESPONSES,
    validate_image_upload,
)

MB = 1024 * 1024


@pytest.fixture
def png_upload():
    return ImageUpload(filename="cat.png", mimetype="image/png", data=b"\x89PNG fake")


class TestValidateImageUpload:
    """Tests for upload checks."""

    def test_accepts_image(self):
        upload = validate_image_upload("cat.png", "image/png", b"abc")

        assert upload.size == 3
        assert upload.mimetype == "image/png"

    def test_missing_file(self):
        with pytest.raises(ValidationError, match="No image file"):
            validate_image_upload(None, None, None)

    def test_rejects_non_image(self):
        with pytest.raises(ValidationError, match="Only image files"):
            validate_image_upload("notes.txt", "text/plain", b"hello")

    def test_rejects_over_limit(self):
        with pytest.raises(ValidationError, match="File too large"):
            validate_image_upload("big.jpg", "image/jpeg", b"\0" * (6 * MB))

    def test_accepts_under_limit(self):
        upload = validate_image_upload("ok.jpg", "image/jpeg", b"\0" * (4 * MB))

        assert upload.size == 4 * MB

    def test_exact_limit_accepted(self):
        upload = validate_image_upload("edge.jpg", "image/jpeg", b"\0" * (5 * MB))

        assert upload.size == 5 * MB

    def test_data_url(self):
        upload = ImageUpload(filename="a.gif", mimetype="image/gif", data=b"GIF89a")

        assert upload.to_data_url() == "data:image/gif;base64," + base64.b64encode(b"GIF89a").decode()


class TestMockAltTextProvider:
    """Tests for the mock provider."""

    def test_returns_known_response(self, png_upload):
        provider = MockAltTextProvider(seed=1)

        assert provider.generate(png_upload) in MOCK_RESPONSES

    def test_seeded_sequences_match(self, png_upload):
        first = MockAltTextProvider(seed=7)
        second = MockAltTextProvider(seed=7)

        assert [first.generate(png_upload) for _ in range(5)] == [
            second.generate(png_upload) for _ in range(5)
        ]

    def test_custom_table(self, png_upload):
        provider = MockAltTextProvider(seed=3, responses=["Only option"])

        assert provider.generate(png_upload) == "Only option"


class TestOpenAIAltTextProvider:
    """Tests for the LangChain vision provider."""

    def test_sends_prompt_and_image(self, png_upload):
        llm = MagicMock()
        llm.invoke.return_value = SimpleNamespace(content="  A cat on a windowsill \n")
        provider = OpenAIAltTextProvider(llm=llm)

        result = provider.generate(png_upload)

        assert result == "A cat on a windowsill"
        message = llm.invoke.call_args.args[0][0]
        text_part, image_part = message.content
        assert "alt text" in text_part["text"]
        assert image_part["image_url"]["url"].startswith("data:image/png;base64,")

    def test_failure_raises_upstream(self, png_upload):
        llm = MagicMock()
        llm.invoke.side_effect = RuntimeError("rate limited")

        with pytest.raises(UpstreamError):
            OpenAIAltTextProvider(llm=llm).generate(png_upload)


class TestAltTextGenerator:
    """Tests for provider selection."""

    def test_mock_without_api_key(self):
        generator = AltTextGenerator.from_config(AppConfig(openai_api_key="", mock_delay_seconds=0))

        assert generator.uses_mock

    def test_openai_with_api_key(self):
        generator = AltTextGenerator.from_config(AppConfig(openai_api_key="sk-test-dummy-key"))

        assert isinstance(generator.provider, OpenAIAltTextProvider)
        assert not generator.uses_mock

    def test_generate_delegates(self, png_upload):
        generator = AltTextGenerator(MockAltTextProvider(seed=5, responses=["Fixed"]))

        assert generator.generate(png_upload) == "Fixed"
