"""Tests for the transformer classifier with the model pipeline mocked out."""

import asyncio
import time
from unittest.mock import MagicMock, patch

import pytest

from govhub.sentiment.config import SentimentConfig
from govhub.sentiment.transformer import TransformerSentimentClassifier


def _fake_pipeline(outputs):
    fake = MagicMock()
    fake.return_value = [outputs]
    return fake


@pytest.fixture
def classifier():
    return TransformerSentimentClassifier(SentimentConfig(backend="transformer", device="cpu"))


class TestTransformerClassifier:

    def test_lazy_loading(self, classifier):
        assert not classifier.is_initialized

    @pytest.mark.asyncio
    async def test_classify_positive(self, classifier):
        fake = _fake_pipeline([
            {"label": "positive", "score": 0.92},
            {"label": "neutral", "score": 0.06},
            {"label": "negative", "score": 0.02},
        ])
        with patch.object(classifier, "_load_pipeline", return_value=fake):
            result = await classifier.classify("The bridge is fantastic")

        assert result.sentiment_summary == "Positive"
        assert result.confidence == pytest.approx(0.92)
        assert classifier.is_initialized
        fake.assert_called_once_with(["The bridge is fantastic"])

    @pytest.mark.asyncio
    async def test_label_aliases(self, classifier):
        fake = _fake_pipeline([
            {"label": "LABEL_0", "score": 0.4},
            {"label": "LABEL_1", "score": 0.2},
            {"label": "LABEL_2", "score": 0.4},
        ])
        with patch.object(classifier, "_load_pipeline", return_value=fake):
            result = await classifier.classify("Good clinic, awful queues")

        assert result.sentiment_summary == "Mixed"

    @pytest.mark.asyncio
    async def test_model_loaded_once(self, classifier):
        fake = _fake_pipeline([{"label": "neutral", "score": 0.9}])
        with patch.object(classifier, "_load_pipeline", return_value=fake) as loader:
            await classifier.classify("first")
            await classifier.classify("second")

        loader.assert_called_once()

    @pytest.mark.asyncio
    async def test_concurrent_first_calls_load_model_once(self, classifier):
        fake = _fake_pipeline([{"label": "neutral", "score": 0.9}])

        def slow_load():
            time.sleep(0.05)
            return fake

        with patch.object(classifier, "_load_pipeline", side_effect=slow_load) as loader:
            results = await asyncio.gather(
                *(classifier.classify(f"comment {i}") for i in range(4))
            )

        assert loader.call_count == 1
        assert all(r.sentiment_summary == "Neutral" for r in results)

    @pytest.mark.asyncio
    async def test_health_check_does_not_load_model(self, classifier):
        details = await classifier.health_check()

        assert details["backend"] == "transformer"
        assert details["loaded"] == "false"
        assert not classifier.is_initialized

    @pytest.mark.asyncio
    async def test_blank_text_skips_model(self, classifier):
        fake = _fake_pipeline([])
        with patch.object(classifier, "_load_pipeline", return_value=fake):
            result = await classifier.classify("   ")

        assert result.sentiment_summary == "Neutral"
        fake.assert_not_called()

    @pytest.mark.asyncio
    async def test_close_releases_model(self, classifier):
        fake = _fake_pipeline([{"label": "neutral", "score": 0.9}])
        with patch.object(classifier, "_load_pipeline", return_value=fake):
            await classifier.classify("text")

        await classifier.close()
        assert not classifier.is_initialized

    def test_explicit_device(self, classifier):
        assert classifier._resolve_device() == "cpu"
