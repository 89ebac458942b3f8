"""Tests for feedback aggregation helpers."""

import pytest

from govhub.feedback.schemas import FeedbackRecord
from govhub.feedback.stats import summarize_feedback, with_project_titles


def _record(i, project_id="p1", rating=None, summary=None):
    return FeedbackRecord(
        id=f"{project_id}-fb-{i}",
        project_id=project_id,
        author_name="A",
        comment="text",
        rating=rating,
        sentiment_summary=summary,
    )


class TestSummarizeFeedback:

    def test_empty(self):
        summary = summarize_feedback([])
        assert summary.count == 0
        assert summary.avg_rating is None
        assert summary.sentiment_distribution == {}

    def test_average_ignores_unrated(self):
        records = [_record(1, rating=5), _record(2, rating=4), _record(3)]
        assert summarize_feedback(records).avg_rating == 4.5

    def test_average_rounded(self):
        records = [_record(1, rating=5), _record(2, rating=4), _record(3, rating=4)]
        assert summarize_feedback(records).avg_rating == 4.33

    def test_distribution_counts_pending(self):
        records = [
            _record(1, summary="Positive"),
            _record(2, summary="Positive"),
            _record(3, summary="Mixed"),
            _record(4),
        ]
        summary = summarize_feedback(records)
        assert summary.sentiment_distribution == {"Positive": 2, "Mixed": 1, "Pending": 1}

    def test_to_dict(self):
        payload = summarize_feedback([_record(1, rating=3, summary="Neutral")]).to_dict()
        assert payload == {
            "count": 1,
            "avgRating": 3.0,
            "sentimentDistribution": {"Neutral": 1},
        }


class TestWithProjectTitles:

    @pytest.mark.asyncio
    async def test_attaches_titles(self, directory):
        items = await with_project_titles([_record(1, "p1"), _record(1, "p2")], directory)

        assert items[0]["projectTitle"] == "Lagos-Ibadan Expressway Reconstruction"
        assert items[1]["projectTitle"] == "Second Niger Bridge"
        assert items[0]["id"] == "p1-fb-1"

    @pytest.mark.asyncio
    async def test_unknown_project_title(self, directory):
        items = await with_project_titles([_record(1, "gone")], directory)
        assert items[0]["projectTitle"] == "Unknown Project"
