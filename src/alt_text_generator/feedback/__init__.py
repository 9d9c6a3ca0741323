"""Feedback module for collecting and aggregating alt text ratings."""

from .feedback_store import FeedbackStore
from .feedback_metrics import AnalyticsSummary, FeedbackAnalytics, summarize

__all__ = [
    "FeedbackStore",
    "FeedbackAnalytics",
    "AnalyticsSummary",
    "summarize",
]
