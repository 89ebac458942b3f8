"""Tests for feedback draft and record validation."""

from datetime import datetime, timezone

import pytest

from govhub.feedback.schemas import (
    FeedbackDraft,
    FeedbackRecord,
    make_feedback_id,
    newest_first,
)


class TestFeedbackDraft:
    """Tests for FeedbackDraft construction."""

    def test_valid_draft(self, sample_draft):
        assert sample_draft.author_name == "Aisha Bello"
        assert sample_draft.comment == "Great progress"
        assert sample_draft.rating == 5
        assert sample_draft.user_id is None

    def test_rating_optional(self):
        draft = FeedbackDraft(author_name="Chidi", comment="Any update?")
        assert draft.rating is None

    def test_rating_boundaries(self):
        for r in (1, 2, 3, 4, 5):
            assert FeedbackDraft("A", "text", rating=r).rating == r

    def test_rating_too_low(self):
        with pytest.raises(ValueError, match="Invalid rating"):
            FeedbackDraft("A", "text", rating=0)

    def test_rating_too_high(self):
        with pytest.raises(ValueError, match="Invalid rating"):
            FeedbackDraft("A", "text", rating=6)

    def test_empty_comment(self):
        with pytest.raises(ValueError, match="Invalid comment"):
            FeedbackDraft("A", "")

    def test_whitespace_comment(self):
        with pytest.raises(ValueError, match="Invalid comment"):
            FeedbackDraft("A", "   ")

    def test_blank_author(self):
        with pytest.raises(ValueError, match="Invalid author_name"):
            FeedbackDraft(" ", "text")


class TestFeedbackRecord:
    """Tests for FeedbackRecord creation and serialization."""

    def test_from_draft(self, sample_draft):
        created = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
        record = FeedbackRecord.from_draft("p1", 3, sample_draft, created_at=created)

        assert record.id == "p1-fb-3"
        assert record.project_id == "p1"
        assert record.author_name == "Aisha Bello"
        assert record.rating == 5
        assert record.sentiment_summary is None
        assert record.created_at == created
        assert not record.is_annotated

    def test_created_at_defaults_to_utc_now(self, sample_draft):
        record = FeedbackRecord.from_draft("p1", 1, sample_draft)
        assert record.created_at.tzinfo is not None

    def test_invalid_rating_rejected(self):
        with pytest.raises(ValueError, match="Invalid rating"):
            FeedbackRecord(id="p1-fb-1", project_id="p1", author_name="A", comment="x", rating=9)

    def test_to_dict_shape(self, sample_draft):
        created = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
        record = FeedbackRecord.from_draft("p1", 1, sample_draft, created_at=created)
        record.sentiment_summary = "Positive"

        assert record.to_dict() == {
            "id": "p1-fb-1",
            "projectId": "p1",
            "userId": None,
            "authorName": "Aisha Bello",
            "comment": "Great progress",
            "rating": 5,
            "sentimentSummary": "Positive",
            "createdAt": "2026-03-01T12:00:00+00:00",
        }

    def test_make_feedback_id(self):
        assert make_feedback_id("p42", 7) == "p42-fb-7"

    def test_newest_first(self):
        older = FeedbackRecord(
            id="p1-fb-1", project_id="p1", author_name="A", comment="one",
            created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
        )
        newer = FeedbackRecord(
            id="p1-fb-2", project_id="p1", author_name="B", comment="two",
            created_at=datetime(2026, 2, 1, tzinfo=timezone.utc),
        )
        assert [r.id for r in newest_first([older, newer])] == ["p1-fb-2", "p1-fb-1"]
