"""Alt text providers: OpenAI vision via LangChain, and a mock for demos."""

import random
import time
from typing import Optional, Protocol

from langchain_core.messages import HumanMessage

from ..errors import UpstreamError
from ..observability import logger
from .uploads import ImageUpload

ALT_TEXT_PROMPT = (
    "Generate a concise, descriptive alt text for this image. Focus on the main subject, "
    "important details, and context that would help someone who cannot see the image "
    "understand what it shows. Keep it under 125 characters when possible."
)

MOCK_RESPONSES = [
    "A person working on a laptop computer in a bright, modern office space",
    "Beautiful sunset landscape with mountains and colorful sky in the background",
    "Close-up portrait of a happy golden retriever dog sitting outdoors on grass",
    "Modern kitchen interior with white cabinets and stainless steel appliances",
    "Group of friends enjoying dinner together at a restaurant table",
    "Serene mountain lake surrounded by pine trees under a clear blue sky",
    "Vintage red bicycle leaning against a brick wall covered with green ivy",
    "Professional woman giving a business presentation to colleagues in conference room",
    "Fresh vegetables and fruits arranged colorfully on a wooden cutting board",
    "Cozy living room with comfortable sofa, plants, and warm lighting",
]


class AltTextProvider(Protocol):
    """Protocol for alt text providers."""

    name: str

    def generate(self, upload: ImageUpload) -> str:
        """Describe an image."""
        ...


class MockAltTextProvider:
    """Returns one of a fixed set of descriptions. Seedable for tests."""

    name = "mock"

    def __init__(
        self,
        seed: Optional[int] = None,
        delay_seconds: float = 0.0,
        responses: Optional[list[str]] = None,
    ):
        self._rng = random.Random(seed)
        self.delay_seconds = delay_seconds
        self.responses = list(responses or MOCK_RESPONSES)

    def generate(self, upload: ImageUpload) -> str:
        # Simulate API latency
        if self.delay_seconds > 0:
            time.sleep(self.delay_seconds)
        return self._rng.choice(self.responses)


class OpenAIAltTextProvider:
    """Describes images with an OpenAI vision model through LangChain."""

    name = "openai"

    def __init__(
        self,
        model_name: str = "gpt-4o",
        api_key: Optional[str] = None,
        max_tokens: int = 150,
        llm=None,
    ):
        self.model_name = model_name
        if llm is None:
            from langchain_openai import ChatOpenAI
            llm = ChatOpenAI(model=model_name, api_key=api_key, max_tokens=max_tokens)
        self.llm = llm

    def generate(self, upload: ImageUpload) -> str:
        message = HumanMessage(content=[
            {"type": "text", "text": ALT_TEXT_PROMPT},
            {"type": "image_url", "image_url": {"url": upload.to_data_url()}},
        ])

        try:
            response = self.llm.invoke([message])
        except Exception as e:
            logger.error(f"OpenAI API error: {e}")
            raise UpstreamError("Failed to generate alt text using OpenAI") from e

        content = response.content if isinstance(response.content, str) else ""
        return content.strip()
