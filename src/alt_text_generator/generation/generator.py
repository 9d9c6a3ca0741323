"""Alt text generation with provider selection and mock fallback."""

from ..config import AppConfig
from ..observability import OperationTimer, logger
from .providers import AltTextProvider, MockAltTextProvider, OpenAIAltTextProvider
from .uploads import ImageUpload


class AltTextGenerator:
    """
    Generates alt text for validated uploads.

    Uses the OpenAI provider when an API key is configured and falls back
    to the mock provider otherwise, or when the client cannot be created.
    """

    def __init__(self, provider: AltTextProvider):
        self.provider = provider

    @classmethod
    def from_config(cls, config: AppConfig) -> "AltTextGenerator":
        if config.has_openai:
            try:
                return cls(OpenAIAltTextProvider(
                    model_name=config.vision_model,
                    api_key=config.openai_api_key,
                ))
            except Exception as e:
                logger.warning(f"Failed to initialize vision model, falling back to mock mode: {e}")

        return cls(MockAltTextProvider(
            seed=config.mock_seed,
            delay_seconds=config.mock_delay_seconds,
        ))

    @property
    def uses_mock(self) -> bool:
        return isinstance(self.provider, MockAltTextProvider)

    def generate(self, upload: ImageUpload) -> str:
        with OperationTimer(f"alt_text:{self.provider.name}") as timer:
            alt_text = self.provider.generate(upload)

        logger.info(
            f"Generated alt text with {self.provider.name} provider "
            f"({upload.mimetype}, {upload.size} bytes) in {timer.duration_ms}ms"
        )
        return alt_text
