"""Training Data Exporter - turns stored feedback into fine-tuning examples."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

from ..errors import StorageIOError
from ..models.feedback import ChatMessage, FeedbackRecord, TrainingExample
from ..observability import logger
from .seed_examples import ACCESSIBILITY_INSTRUCTION, default_seed_examples

FEEDBACK_INSTRUCTION = (
    "Generate concise, descriptive alt text for web accessibility. "
    "Focus on the most important visual elements."
)
DEFAULT_IMAGE_TYPE = "general image"
MIN_GOOD_RATING = 4


@dataclass
class ExportResult:
    """Examples produced from feedback and their serialized payload."""

    examples: list[TrainingExample] = field(default_factory=list)
    payload: str = ""

    @property
    def count(self) -> int:
        return len(self.examples)


@dataclass
class CompleteExportResult:
    """Seed examples merged with feedback-derived improvement examples."""

    base_examples: int = 0
    feedback_examples: int = 0
    payload: str = ""

    @property
    def total_examples(self) -> int:
        return self.base_examples + self.feedback_examples

    def to_dict(self) -> dict:
        return {
            "totalExamples": self.total_examples,
            "baseExamples": self.base_examples,
            "feedbackExamples": self.feedback_examples,
        }


def is_training_candidate(record: FeedbackRecord) -> bool:
    """Keep well-rated feedback and anything the user corrected."""
    return (record.rating or 0) >= MIN_GOOD_RATING or bool(record.user_improvement)


def build_feedback_example(record: FeedbackRecord) -> TrainingExample:
    return TrainingExample(messages=[
        ChatMessage(role="system", content=FEEDBACK_INSTRUCTION),
        ChatMessage(
            role="user",
            content=f"Generate alt text for this image type: {record.image_type or DEFAULT_IMAGE_TYPE}",
        ),
        ChatMessage(
            role="assistant",
            content=record.user_improvement or record.generated_alt_text,
        ),
    ])


def build_improvement_example(record: FeedbackRecord) -> TrainingExample:
    return TrainingExample(messages=[
        ChatMessage(role="system", content=ACCESSIBILITY_INSTRUCTION),
        ChatMessage(role="user", content=f'Improve this alt text: "{record.generated_alt_text}"'),
        ChatMessage(role="assistant", content=record.user_improvement or ""),
    ])


def serialize_examples(examples: Sequence[TrainingExample]) -> str:
    """One compact JSON object per line, no trailing newline."""
    return "\n".join(
        json.dumps(example.to_dict(), separators=(",", ":"), ensure_ascii=False)
        for example in examples
    )


class TrainingDataExporter:
    """
    Builds JSONL fine-tuning data from feedback records.

    Two exports:
    - export_training_data: feedback-only examples, written to export_path
    - export_complete_training_data: seed examples plus improvement examples,
      written to complete_path unless writing is disabled (production)
    """

    def __init__(
        self,
        export_path: str = "training-data-from-feedback.jsonl",
        complete_path: str = "training-examples.jsonl",
        seed_examples: Optional[list[TrainingExample]] = None,
        write_complete: bool = True,
    ):
        self.export_path = Path(export_path)
        self.complete_path = Path(complete_path)
        self.seed_examples = seed_examples if seed_examples is not None else default_seed_examples()
        self.write_complete = write_complete

    def export_training_data(self, records: Sequence[FeedbackRecord]) -> ExportResult:
        """Filter, map and serialize feedback, overwriting the previous export."""
        examples = [build_feedback_example(r) for r in records if is_training_candidate(r)]
        result = ExportResult(examples=examples, payload=serialize_examples(examples))

        self._write(self.export_path, result.payload)
        logger.info(f"Exported {result.count} training examples to {self.export_path}")
        return result

    def export_complete_training_data(self, records: Sequence[FeedbackRecord]) -> CompleteExportResult:
        feedback_examples = [
            build_improvement_example(r)
            for r in records
            if (r.rating or 0) >= MIN_GOOD_RATING and r.user_improvement
        ]
        all_examples = list(self.seed_examples) + feedback_examples

        result = CompleteExportResult(
            base_examples=len(self.seed_examples),
            feedback_examples=len(feedback_examples),
            payload=serialize_examples(all_examples),
        )

        if self.write_complete:
            self._write(self.complete_path, result.payload)

        logger.info(
            f"Built complete training corpus: {result.base_examples} seed + "
            f"{result.feedback_examples} feedback examples"
        )
        return result

    def _write(self, path: Path, payload: str):
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(payload)
        except OSError as e:
            logger.error(f"Error writing training data to {path}: {e}")
            raise StorageIOError(f"Cannot write training export {path}: {e}") from e
