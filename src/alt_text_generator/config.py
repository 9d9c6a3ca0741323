"""Configuration for the Alt Text Generator."""

import os
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


@dataclass
class AppConfig:
    """Main configuration for the alt text service."""

    # Server settings
    port: int = 3000
    environment: str = "development"

    # Model settings
    openai_api_key: str = ""
    vision_model: str = "gpt-4o"
    fine_tune_base_model: str = "gpt-4o-mini"
    min_fine_tune_examples: int = 10

    # Storage paths
    feedback_file: str = "feedback-data.json"
    training_export_file: str = "training-data-from-feedback.jsonl"
    complete_training_file: str = "training-examples.jsonl"
    seed_examples_file: str = ""

    # Upload limits
    max_image_bytes: int = 5 * 1024 * 1024

    # Mock generator settings
    mock_seed: Optional[int] = None
    mock_delay_seconds: float = 1.5

    @property
    def has_openai(self) -> bool:
        return bool(self.openai_api_key)

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load configuration from environment variables."""
        mock_seed = os.getenv("MOCK_SEED", "").strip()

        return cls(
            port=int(os.getenv("PORT", "3000")),
            environment=os.getenv("APP_ENV", "development"),
            openai_api_key=os.getenv("OPENAI_API_KEY", ""),
            vision_model=os.getenv("VISION_MODEL", "gpt-4o"),
            fine_tune_base_model=os.getenv("FINE_TUNE_BASE_MODEL", "gpt-4o-mini"),
            min_fine_tune_examples=int(os.getenv("MIN_FINE_TUNE_EXAMPLES", "10")),
            feedback_file=os.getenv("FEEDBACK_FILE", "feedback-data.json"),
            training_export_file=os.getenv(
                "TRAINING_EXPORT_FILE", "training-data-from-feedback.jsonl"
            ),
            complete_training_file=os.getenv("COMPLETE_TRAINING_FILE", "training-examples.jsonl"),
            seed_examples_file=os.getenv("SEED_EXAMPLES_FILE", ""),
            max_image_bytes=int(os.getenv("MAX_IMAGE_BYTES", str(5 * 1024 * 1024))),
            mock_seed=int(mock_seed) if mock_seed else None,
            mock_delay_seconds=float(os.getenv("MOCK_DELAY_SECONDS", "1.5")),
        )


def get_config() -> AppConfig:
    """Get the current configuration."""
    return AppConfig.from_env()
