"""Tests for InMemoryFeedbackStore."""

import asyncio

import pytest

from govhub.feedback.errors import FeedbackNotFoundError, ProjectNotFoundError
from govhub.feedback.schemas import FeedbackDraft


class TestAppend:
    """Tests for InMemoryFeedbackStore.append()."""

    @pytest.mark.asyncio
    async def test_append_assigns_id_and_timestamp(self, store, sample_draft):
        record = await store.append("p1", sample_draft)

        assert record.id == "p1-fb-1"
        assert record.project_id == "p1"
        assert record.created_at is not None
        assert record.sentiment_summary is None
        assert await store.count("p1") == 1

    @pytest.mark.asyncio
    async def test_ids_sequential_per_project(self, store, sample_draft):
        first = await store.append("p1", sample_draft)
        second = await store.append("p1", sample_draft)
        other = await store.append("p2", sample_draft)

        assert first.id == "p1-fb-1"
        assert second.id == "p1-fb-2"
        assert other.id == "p2-fb-1"

    @pytest.mark.asyncio
    async def test_unknown_project_raises_without_mutation(self, store, sample_draft):
        with pytest.raises(ProjectNotFoundError) as exc_info:
            await store.append("does-not-exist", sample_draft)

        assert exc_info.value.project_id == "does-not-exist"
        assert await store.count("does-not-exist") == 0
        assert store.total_count == 0

    @pytest.mark.asyncio
    async def test_returns_copy(self, store, sample_draft):
        record = await store.append("p1", sample_draft)
        record.sentiment_summary = "Tampered"

        stored = await store.get("p1", record.id)
        assert stored.sentiment_summary is None

    @pytest.mark.asyncio
    async def test_round_trip_rating_and_created_at(self, store):
        record = await store.append("p1", FeedbackDraft("Emeka", "Roads are better", rating=4))
        await store.annotate("p1", record.id, "Positive")

        stored = await store.get("p1", record.id)
        assert stored.rating == 4
        assert stored.created_at == record.created_at

    @pytest.mark.asyncio
    async def test_concurrent_appends_get_unique_ids(self, store, sample_draft):
        records = await asyncio.gather(
            *(store.append("p1", sample_draft) for _ in range(20))
        )

        ids = {r.id for r in records}
        assert len(ids) == 20
        assert await store.count("p1") == 20


class TestAnnotate:
    """Tests for InMemoryFeedbackStore.annotate()."""

    @pytest.mark.asyncio
    async def test_annotate_sets_summary(self, store, sample_draft):
        record = await store.append("p1", sample_draft)

        annotated = await store.annotate("p1", record.id, "Positive")

        assert annotated.sentiment_summary == "Positive"
        assert (await store.get("p1", record.id)).sentiment_summary == "Positive"

    @pytest.mark.asyncio
    async def test_annotate_twice_last_write_wins(self, store, sample_draft):
        record = await store.append("p1", sample_draft)

        await store.annotate("p1", record.id, "Positive")
        await store.annotate("p1", record.id, "Mixed")

        assert (await store.get("p1", record.id)).sentiment_summary == "Mixed"

    @pytest.mark.asyncio
    async def test_annotate_unknown_feedback(self, store, sample_draft):
        await store.append("p1", sample_draft)

        with pytest.raises(FeedbackNotFoundError):
            await store.annotate("p1", "p1-fb-99", "Positive")

    @pytest.mark.asyncio
    async def test_annotate_unknown_project(self, store):
        with pytest.raises(ProjectNotFoundError):
            await store.annotate("nope", "nope-fb-1", "Positive")

    @pytest.mark.asyncio
    async def test_annotate_keeps_created_at(self, store, sample_draft):
        record = await store.append("p1", sample_draft)
        annotated = await store.annotate("p1", record.id, "Positive")
        assert annotated.created_at == record.created_at


class TestListing:
    """Tests for list_for_project(), list_all() and list_for_user()."""

    @pytest.mark.asyncio
    async def test_list_for_project_newest_first(self, store):
        for i in range(3):
            await store.append("p1", FeedbackDraft("A", f"comment {i}"))
            await asyncio.sleep(0.001)

        records = await store.list_for_project("p1")
        assert [r.comment for r in records] == ["comment 2", "comment 1", "comment 0"]

    @pytest.mark.asyncio
    async def test_list_for_project_empty(self, store):
        assert await store.list_for_project("p2") == []

    @pytest.mark.asyncio
    async def test_list_for_unknown_project(self, store):
        with pytest.raises(ProjectNotFoundError):
            await store.list_for_project("missing")

    @pytest.mark.asyncio
    async def test_list_all_spans_projects(self, store, sample_draft):
        await store.append("p1", sample_draft)
        await store.append("p2", sample_draft)

        records = await store.list_all()
        assert {r.project_id for r in records} == {"p1", "p2"}

    @pytest.mark.asyncio
    async def test_list_for_user(self, store):
        await store.append("p1", FeedbackDraft("Aisha", "first", user_id="u1"))
        await store.append("p2", FeedbackDraft("Aisha", "second", user_id="u1"))
        await store.append("p1", FeedbackDraft("Anonymous", "third"))

        records = await store.list_for_user("u1")
        assert len(records) == 2
        assert all(r.user_id == "u1" for r in records)
