"""Data models for the Alt Text Generator."""

from .feedback import (
    FeedbackInput,
    FeedbackRecord,
    ChatMessage,
    TrainingExample,
)

__all__ = [
    "FeedbackInput",
    "FeedbackRecord",
    "ChatMessage",
    "TrainingExample",
]
