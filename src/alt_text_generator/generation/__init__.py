"""Generation module - image validation and alt text providers."""

from .generator import AltTextGenerator
from .providers import (
    AltTextProvider,
    MockAltTextProvider,
    OpenAIAltTextProvider,
    MOCK_RESPONSES,
)
from .uploads import ImageUpload, validate_image_upload, MAX_IMAGE_BYTES

__all__ = [
    "AltTextGenerator",
    "AltTextProvider",
    "MockAltTextProvider",
    "OpenAIAltTextProvider",
    "MOCK_RESPONSES",
    "ImageUpload",
    "validate_image_upload",
    "MAX_IMAGE_BYTES",
]
