"""
Sentiment classifier contract shared by all backends.

A classifier maps a comment to a SentimentResult whose
``sentiment_summary`` is the short label stored on feedback records:
"Positive", "Negative", "Neutral", or "Mixed".

The base class owns the parts every backend shares:
- Redis result caching keyed by content hash (optional)
- Latency and outcome metrics
- Conversion of backend failures into ClassificationError
"""

import hashlib
import json
import time
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from typing import Any

import redis.asyncio as redis
import structlog

from govhub.observability.metrics import get_metrics
from govhub.sentiment.config import SentimentConfig

logger = structlog.get_logger(__name__)

SUMMARY_LABELS = {
    "positive": "Positive",
    "negative": "Negative",
    "neutral": "Neutral",
}
MIXED_SUMMARY = "Mixed"
OTHER_SUMMARY_LABEL = "other"

_KNOWN_SUMMARIES = {
    s.lower(): s for s in (*SUMMARY_LABELS.values(), MIXED_SUMMARY)
}


def normalize_summary(summary: str) -> str:
    """Canonical casing for a known summary ("POSITIVE" -> "Positive"); others are returned stripped."""
    summary = summary.strip()
    return _KNOWN_SUMMARIES.get(summary.lower(), summary)


def summary_metric_label(summary: str) -> str:
    """Bounded metric label: a known summary, or "other"."""
    return summary if summary in _KNOWN_SUMMARIES.values() else OTHER_SUMMARY_LABEL


class ClassificationError(Exception):
    """Raised when a comment cannot be classified."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass
class SentimentResult:
    """Outcome of classifying one comment.

    Attributes:
        label: Dominant class (positive, negative, neutral).
        confidence: Score of the dominant class.
        scores: Probability per class.
        sentiment_summary: Short display label stored on the feedback.
    """

    label: str
    confidence: float
    sentiment_summary: str
    scores: dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def summarize_scores(scores: dict[str, float], mixed_threshold: float = 0.25) -> tuple[str, str]:
    """
    Reduce class scores to a (label, sentiment_summary) pair.

    "Mixed" is reported when both the positive and negative scores reach
    ``mixed_threshold``; otherwise the summary is the dominant label.

    Args:
        scores: Mapping with positive/negative/neutral scores (missing = 0)
        mixed_threshold: Minimum score for both polarities to count as mixed

    Returns:
        (label, summary) tuple
    """
    normalized = {k: float(scores.get(k, 0.0)) for k in ("positive", "negative", "neutral")}
    label = max(normalized, key=normalized.get)  # type: ignore[arg-type]

    if (
        normalized["positive"] >= mixed_threshold
        and normalized["negative"] >= mixed_threshold
    ):
        return label, MIXED_SUMMARY

    return label, SUMMARY_LABELS[label]


class SentimentClassifier(ABC):
    """
    Abstract sentiment classifier.

    Subclasses implement ``_predict``; callers use ``classify``.

    Usage:
        classifier = LexiconSentimentClassifier()
        result = await classifier.classify("Great progress on the road")
        print(result.sentiment_summary)  # "Positive"
    """

    def __init__(
        self,
        config: SentimentConfig | None = None,
        redis_client: redis.Redis | None = None,
    ):
        self._config = config or SentimentConfig()
        self._redis = redis_client

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend identifier used in logs and metrics."""

    @abstractmethod
    async def _predict(self, text: str) -> SentimentResult:
        """Classify text. May raise any exception on failure."""

    @property
    def config(self) -> SentimentConfig:
        return self._config

    def _make_cache_key(self, text: str) -> str:
        content_hash = hashlib.sha256(text.encode("utf-8")).hexdigest()[:32]
        return f"{self._config.cache_key_prefix}{self.name}:{content_hash}"

    async def _get_cached_result(self, text: str) -> SentimentResult | None:
        if not self._config.cache_enabled or not self._redis:
            return None

        try:
            cached = await self._redis.get(self._make_cache_key(text))
            if cached:
                return SentimentResult(**json.loads(cached))
        except Exception as e:
            logger.warning("Sentiment cache retrieval failed", error=str(e))
        return None

    async def _cache_result(self, text: str, result: SentimentResult) -> None:
        if not self._config.cache_enabled or not self._redis:
            return

        try:
            await self._redis.setex(
                self._make_cache_key(text),
                self._config.cache_ttl_seconds,
                json.dumps(result.to_dict()),
            )
        except Exception as e:
            logger.warning("Sentiment cache storage failed", error=str(e))

    async def classify(self, text: str) -> SentimentResult:
        """
        Classify a comment.

        Args:
            text: Comment body

        Returns:
            SentimentResult with a sentiment_summary

        Raises:
            ClassificationError: If the backend fails
        """
        cached = await self._get_cached_result(text)
        if cached is not None:
            return cached

        metrics = get_metrics()
        start = time.perf_counter()
        try:
            result = await self._predict(text)
        except ClassificationError:
            metrics.record_classification_error(self.name)
            raise
        except Exception as e:
            metrics.record_classification_error(self.name)
            raise ClassificationError(str(e) or type(e).__name__) from e

        latency = time.perf_counter() - start
        metrics.record_classification(
            self.name, summary_metric_label(result.sentiment_summary), latency
        )
        logger.debug(
            "Comment classified",
            backend=self.name,
            summary=result.sentiment_summary,
            confidence=round(result.confidence, 3),
            latency_ms=round(latency * 1000, 2),
        )

        await self._cache_result(text, result)
        return result

    async def health_check(self) -> dict[str, str]:
        """
        Report backend readiness without touching the result cache or metrics.

        Returns:
            Details shown on the health endpoint

        Raises:
            ClassificationError: If the backend cannot serve requests
        """
        return {"backend": self.name}

    async def close(self) -> None:
        """Release backend resources."""
