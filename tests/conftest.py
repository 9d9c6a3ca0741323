"""Test configuration and shared fixtures."""

import pytest

from alt_text_generator.config import AppConfig
from alt_text_generator.feedback import FeedbackStore
from alt_text_generator.generation import AltTextGenerator, MockAltTextProvider
from alt_text_generator.models import FeedbackInput
from alt_text_generator.server import create_app
from alt_text_generator.training import TrainingDataExporter


@pytest.fixture
def config(tmp_path):
    """Test configuration with all files under a temp dir and no API key."""
    return AppConfig(
        openai_api_key="",
        feedback_file=str(tmp_path / "feedback-data.json"),
        training_export_file=str(tmp_path / "training-data-from-feedback.jsonl"),
        complete_training_file=str(tmp_path / "training-examples.jsonl"),
        mock_seed=42,
        mock_delay_seconds=0.0,
    )


@pytest.fixture
def store(config):
    return FeedbackStore(config.feedback_file)


@pytest.fixture
def exporter(config):
    return TrainingDataExporter(
        export_path=config.training_export_file,
        complete_path=config.complete_training_file,
    )


@pytest.fixture
def mock_generator():
    return AltTextGenerator(MockAltTextProvider(seed=42))


@pytest.fixture
def app(config, store, mock_generator, exporter):
    return create_app(config, store=store, generator=mock_generator, exporter=exporter)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def sample_feedback():
    """Feedback submissions with ratings [5, 1, 4, 3, 5]."""
    return [
        FeedbackInput(rating=5, generated_alt_text="A cat on a sofa", image_type="image/jpeg", helpful=True),
        FeedbackInput(rating=1, generated_alt_text="A dog", user_improvement="A gray tabby cat asleep on a sofa"),
        FeedbackInput(rating=4, generated_alt_text="Mountain lake at dawn", image_type="image/png"),
        FeedbackInput(rating=3, generated_alt_text="People at a table"),
        FeedbackInput(
            rating=5,
            generated_alt_text="Red bicycle",
            user_improvement="Vintage red bicycle against an ivy-covered brick wall",
            helpful=True,
        ),
    ]
