"""Pytest fixtures for GovHub tests."""

import pytest

from govhub.config.settings import Settings
from govhub.feedback.invalidation import InMemoryViewCache
from govhub.feedback.schemas import FeedbackDraft
from govhub.feedback.store import InMemoryFeedbackStore
from govhub.projects.directory import InMemoryProjectDirectory
from govhub.sentiment.classifier import (
    ClassificationError,
    SentimentClassifier,
    SentimentResult,
)


class StubClassifier(SentimentClassifier):
    """Classifier returning a fixed summary, or raising a given error."""

    def __init__(self, summary: str = "Positive", error: Exception | None = None):
        super().__init__()
        self.summary = summary
        self.error = error
        self.calls: list[str] = []

    @property
    def name(self) -> str:
        return "stub"

    async def _predict(self, text: str) -> SentimentResult:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return SentimentResult(
            label=self.summary.lower(),
            confidence=1.0,
            sentiment_summary=self.summary,
        )


@pytest.fixture
def test_settings() -> Settings:
    """Settings configured for testing."""
    return Settings(
        environment="development",
        log_level="DEBUG",
        storage_backend="memory",
        invalidation_backend="memory",
    )


@pytest.fixture
def directory() -> InMemoryProjectDirectory:
    """Project directory seeded with the sample catalogue (p1..p4)."""
    return InMemoryProjectDirectory.seeded()


@pytest.fixture
def store(directory) -> InMemoryFeedbackStore:
    """Empty in-memory feedback store over the seeded directory."""
    return InMemoryFeedbackStore(directory)


@pytest.fixture
def view_cache() -> InMemoryViewCache:
    return InMemoryViewCache()


@pytest.fixture
def positive_classifier() -> StubClassifier:
    return StubClassifier("Positive")


@pytest.fixture
def failing_classifier() -> StubClassifier:
    return StubClassifier(error=ClassificationError("model unavailable"))


@pytest.fixture
def sample_draft() -> FeedbackDraft:
    """The canonical submission used across tests."""
    return FeedbackDraft(
        author_name="Aisha Bello",
        comment="Great progress",
        rating=5,
    )


@pytest.fixture
def make_classifier():
    """Factory for stub classifiers: make_classifier("Mixed") or make_classifier(error=...)."""
    return StubClassifier
