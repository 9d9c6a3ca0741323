"""Feedback Metrics - summary statistics over stored alt text feedback."""

from dataclasses import dataclass, field
from typing import Sequence

from ..errors import StorageIOError
from ..models.feedback import FeedbackRecord
from ..observability import logger
from .feedback_store import FeedbackStore

RATING_VALUES = (1, 2, 3, 4, 5)
RECENT_FEEDBACK_LIMIT = 10


@dataclass
class AnalyticsSummary:
    """Snapshot of feedback analytics over the full store."""

    total_feedback: int = 0
    average_rating: float = 0
    rating_distribution: dict[int, int] = field(
        default_factory=lambda: {rating: 0 for rating in RATING_VALUES}
    )
    common_improvements: list[str] = field(default_factory=list)
    recent_feedback: list[FeedbackRecord] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "totalFeedback": self.total_feedback,
            "averageRating": self.average_rating,
            "ratingDistribution": {
                str(rating): count for rating, count in self.rating_distribution.items()
            },
            "commonImprovements": list(self.common_improvements),
            "recentFeedback": [record.to_dict() for record in self.recent_feedback],
        }


def summarize(records: Sequence[FeedbackRecord]) -> AnalyticsSummary:
    """
    Compute analytics for a sequence of records.

    Ratings outside 1..5 are still counted in the total and the average
    but do not appear in the distribution. A missing rating counts as 0
    toward the average.
    """
    summary = AnalyticsSummary(total_feedback=len(records))
    if not records:
        return summary

    summary.average_rating = sum(record.rating or 0 for record in records) / len(records)

    for record in records:
        if record.rating in summary.rating_distribution:
            summary.rating_distribution[record.rating] += 1

    summary.common_improvements = [
        record.user_improvement for record in records if record.user_improvement
    ]
    summary.recent_feedback = list(reversed(records[-RECENT_FEEDBACK_LIMIT:]))
    return summary


class FeedbackAnalytics:
    """
    Reads the feedback store and computes analytics.

    Read failures are not propagated: an unreadable or corrupt store is
    reported as an empty summary.
    """

    def __init__(self, store: FeedbackStore):
        self.store = store

    def get_analytics(self) -> AnalyticsSummary:
        try:
            records = self.store.read_all()
        except StorageIOError as e:
            logger.warning(f"Feedback store unreadable, returning empty analytics: {e}")
            return summarize([])

        return summarize(records)

    def log_summary(self, summary: AnalyticsSummary):
        """Log analytics to observability system."""
        logger.info(
            f"Feedback analytics: total={summary.total_feedback}, "
            f"average={summary.average_rating:.2f}, "
            f"improvements={len(summary.common_improvements)}"
        )
