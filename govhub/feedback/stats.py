"""Aggregations over feedback records for dashboards and listings."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from govhub.feedback.schemas import FeedbackRecord
from govhub.projects.directory import ProjectDirectory

UNKNOWN_PROJECT_TITLE = "Unknown Project"


@dataclass
class FeedbackSummary:
    """Counts and averages over a set of feedback records.

    Attributes:
        count: Number of records.
        avg_rating: Mean of the rated records, rounded to 2 places;
            None when no record carries a rating.
        sentiment_distribution: Records per sentiment summary; records
            not yet annotated are counted under "Pending".
    """

    count: int = 0
    avg_rating: float | None = None
    sentiment_distribution: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "avgRating": self.avg_rating,
            "sentimentDistribution": dict(self.sentiment_distribution),
        }


def summarize_feedback(records: list[FeedbackRecord]) -> FeedbackSummary:
    """Compute a FeedbackSummary for records."""
    ratings = [r.rating for r in records if r.rating is not None]
    avg = round(sum(ratings) / len(ratings), 2) if ratings else None
    distribution = Counter(r.sentiment_summary or "Pending" for r in records)
    return FeedbackSummary(
        count=len(records),
        avg_rating=avg,
        sentiment_distribution=dict(distribution),
    )


async def with_project_titles(
    records: list[FeedbackRecord],
    directory: ProjectDirectory,
) -> list[dict[str, Any]]:
    """
    Serialize records with their project's title attached.

    Args:
        records: Feedback to serialize (order preserved)
        directory: Lookup for project titles

    Returns:
        Record dicts with an extra ``projectTitle`` key
    """
    titles: dict[str, str] = {}
    items = []
    for record in records:
        if record.project_id not in titles:
            project = await directory.get_by_id(record.project_id)
            titles[record.project_id] = project.title if project else UNKNOWN_PROJECT_TITLE
        item = record.to_dict()
        item["projectTitle"] = titles[record.project_id]
        items.append(item)
    return items
