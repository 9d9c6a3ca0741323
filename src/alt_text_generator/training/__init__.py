"""Training module - fine-tuning data export and model management."""

from .exporter import (
    TrainingDataExporter,
    ExportResult,
    CompleteExportResult,
    build_feedback_example,
    is_training_candidate,
)
from .fine_tuning import FineTuningManager, FineTunedModelCell
from .seed_examples import load_seed_examples

__all__ = [
    "TrainingDataExporter",
    "ExportResult",
    "CompleteExportResult",
    "build_feedback_example",
    "is_training_candidate",
    "FineTuningManager",
    "FineTunedModelCell",
    "load_seed_examples",
]
