"""Tests for the shared classifier contract: scoring, caching, errors."""

import json
from unittest.mock import ANY, AsyncMock, MagicMock, patch

import pytest

from govhub.sentiment import build_classifier
from govhub.sentiment.classifier import (
    ClassificationError,
    SentimentResult,
    normalize_summary,
    summarize_scores,
    summary_metric_label,
)
from govhub.sentiment.config import SentimentConfig
from govhub.sentiment.lexicon import LexiconSentimentClassifier


class TestSummarizeScores:
    """Tests for summarize_scores()."""

    def test_dominant_positive(self):
        assert summarize_scores({"positive": 0.8, "neutral": 0.15, "negative": 0.05}) == (
            "positive",
            "Positive",
        )

    def test_dominant_negative(self):
        label, summary = summarize_scores({"positive": 0.1, "neutral": 0.2, "negative": 0.7})
        assert label == "negative"
        assert summary == "Negative"

    def test_dominant_neutral(self):
        _, summary = summarize_scores({"positive": 0.1, "neutral": 0.8, "negative": 0.1})
        assert summary == "Neutral"

    def test_mixed_when_both_polarities_strong(self):
        label, summary = summarize_scores({"positive": 0.45, "neutral": 0.1, "negative": 0.45})
        assert summary == "Mixed"
        assert label in ("positive", "negative")

    def test_threshold_is_inclusive(self):
        _, summary = summarize_scores(
            {"positive": 0.5, "neutral": 0.25, "negative": 0.25},
            mixed_threshold=0.25,
        )
        assert summary == "Mixed"

    def test_missing_scores_default_to_zero(self):
        assert summarize_scores({"negative": 0.6}) == ("negative", "Negative")


class TestClassify:
    """Tests for SentimentClassifier.classify() behaviour."""

    @pytest.mark.asyncio
    async def test_wraps_backend_exception(self, make_classifier):
        classifier = make_classifier(error=RuntimeError("CUDA out of memory"))

        with pytest.raises(ClassificationError, match="CUDA out of memory"):
            await classifier.classify("text")

    @pytest.mark.asyncio
    async def test_empty_exception_message_uses_type_name(self, make_classifier):
        classifier = make_classifier(error=TimeoutError())

        with pytest.raises(ClassificationError, match="TimeoutError"):
            await classifier.classify("text")

    @pytest.mark.asyncio
    async def test_classification_error_passes_through(self, make_classifier):
        original = ClassificationError("quota exceeded", status_code=429)
        classifier = make_classifier(error=original)

        with pytest.raises(ClassificationError) as exc_info:
            await classifier.classify("text")

        assert exc_info.value is original
        assert exc_info.value.status_code == 429

    @pytest.mark.asyncio
    async def test_unknown_summary_recorded_as_other(self, make_classifier):
        metrics = MagicMock()
        classifier = make_classifier("Ecstatic")

        with patch("govhub.sentiment.classifier.get_metrics", return_value=metrics):
            result = await classifier.classify("text")

        assert result.sentiment_summary == "Ecstatic"
        metrics.record_classification.assert_called_once_with("stub", "other", ANY)

    @pytest.mark.asyncio
    async def test_known_summary_recorded_as_is(self, make_classifier):
        metrics = MagicMock()

        with patch("govhub.sentiment.classifier.get_metrics", return_value=metrics):
            await make_classifier("Mixed").classify("text")

        metrics.record_classification.assert_called_once_with("stub", "Mixed", ANY)


class TestSummaryLabels:

    def test_normalize_known_summary(self):
        assert normalize_summary(" POSITIVE ") == "Positive"
        assert normalize_summary("mixed") == "Mixed"

    def test_normalize_leaves_unknown_summary(self):
        assert normalize_summary("Cautiously hopeful") == "Cautiously hopeful"

    def test_metric_label_is_bounded(self):
        assert summary_metric_label("Negative") == "Negative"
        assert summary_metric_label("negative") == "other"
        assert summary_metric_label("Cautiously hopeful") == "other"


class TestCaching:
    """Tests for Redis result caching."""

    @pytest.fixture
    def cache_config(self):
        return SentimentConfig(cache_enabled=True, cache_ttl_hours=2)

    @pytest.mark.asyncio
    async def test_cache_hit_skips_backend(self, cache_config):
        cached = SentimentResult(
            label="negative", confidence=0.9, sentiment_summary="Negative",
            scores={"negative": 0.9},
        )
        redis_client = AsyncMock()
        redis_client.get.return_value = json.dumps(cached.to_dict())
        classifier = LexiconSentimentClassifier(cache_config, redis_client)

        result = await classifier.classify("Great progress")

        assert result.sentiment_summary == "Negative"
        redis_client.setex.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_cache_miss_stores_result(self, cache_config):
        redis_client = AsyncMock()
        redis_client.get.return_value = None
        classifier = LexiconSentimentClassifier(cache_config, redis_client)

        result = await classifier.classify("Great progress")

        assert result.sentiment_summary == "Positive"
        key, ttl, payload = redis_client.setex.await_args.args
        assert key.startswith("sentiment:lexicon:")
        assert ttl == 7200
        assert json.loads(payload)["sentiment_summary"] == "Positive"

    @pytest.mark.asyncio
    async def test_cache_errors_are_ignored(self, cache_config):
        redis_client = AsyncMock()
        redis_client.get.side_effect = ConnectionError("redis down")
        redis_client.setex.side_effect = ConnectionError("redis down")
        classifier = LexiconSentimentClassifier(cache_config, redis_client)

        result = await classifier.classify("Great progress")

        assert result.sentiment_summary == "Positive"

    @pytest.mark.asyncio
    async def test_cache_disabled(self):
        redis_client = AsyncMock()
        classifier = LexiconSentimentClassifier(SentimentConfig(), redis_client)

        await classifier.classify("Great progress")

        redis_client.get.assert_not_awaited()


class TestBuildClassifier:
    """Tests for build_classifier()."""

    def test_default_is_lexicon(self):
        assert build_classifier(SentimentConfig()).name == "lexicon"

    def test_http_backend(self):
        config = SentimentConfig(backend="http", endpoint_url="http://nlp.test/classify")
        assert build_classifier(config).name == "http"

    def test_http_backend_requires_endpoint(self):
        with pytest.raises(ValueError, match="SENTIMENT_ENDPOINT_URL"):
            build_classifier(SentimentConfig(backend="http"))

    def test_transformer_backend_is_lazy(self):
        classifier = build_classifier(SentimentConfig(backend="transformer"))
        assert classifier.name == "transformer"
        assert not classifier.is_initialized
