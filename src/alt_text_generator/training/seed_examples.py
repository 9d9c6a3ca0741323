"""Hand-authored seed examples for the fine-tuning corpus."""

import json
from pathlib import Path
from typing import Optional

from ..errors import StorageIOError
from ..models.feedback import ChatMessage, TrainingExample

ACCESSIBILITY_INSTRUCTION = (
    "Generate concise, descriptive alt text for web accessibility. "
    "Focus on the main subject, important details, and context that would help "
    "someone who cannot see the image understand what it shows. "
    "Keep it under 125 characters when possible."
)

# (user request, assistant reply)
SEED_PAIRS = [
    (
        "Generate alt text for an image showing a person working on a laptop in a modern "
        "office space with large windows and plants",
        "Person typing on laptop at desk in bright modern office with large windows and green plants",
    ),
    (
        "Generate alt text for an image of a golden retriever dog sitting in a park on grass "
        "with trees in background",
        "Golden retriever dog sitting on green grass in park with trees in background",
    ),
    (
        "Generate alt text for a screenshot of a website dashboard showing analytics charts and graphs",
        "Website dashboard interface displaying multiple analytics charts and performance graphs",
    ),
    (
        "Generate alt text for a photo of fresh vegetables arranged on a wooden cutting board in a kitchen",
        "Fresh vegetables including tomatoes, carrots, and lettuce arranged on wooden cutting board",
    ),
    (
        "Generate alt text for an image showing a student reading a book in a library with bookshelves",
        "Student reading book while sitting at table in library surrounded by tall bookshelves",
    ),
]


def default_seed_examples() -> list[TrainingExample]:
    return [
        TrainingExample(messages=[
            ChatMessage(role="system", content=ACCESSIBILITY_INSTRUCTION),
            ChatMessage(role="user", content=request),
            ChatMessage(role="assistant", content=reply),
        ])
        for request, reply in SEED_PAIRS
    ]


def load_seed_examples(path: Optional[str] = None) -> list[TrainingExample]:
    """
    Load seed examples from a JSON file, or the built-in table.

    The file holds a JSON array of {"messages": [...]} objects.
    """
    if not path:
        return default_seed_examples()

    try:
        with open(Path(path), "r", encoding="utf-8") as f:
            data = json.load(f)
        return [TrainingExample.from_dict(item) for item in data]
    except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
        raise StorageIOError(f"Cannot load seed examples from {path}: {e}") from e
