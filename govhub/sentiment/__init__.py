"""
Sentiment classification for citizen feedback.

Provides short sentiment summaries ("Positive", "Negative", "Neutral",
"Mixed") for feedback comments with:
- A lexicon backend (default, deterministic)
- An HTTP backend delegating to an external classification service
- A transformer backend running a local Hugging Face model

Usage:
    from govhub.sentiment import build_classifier

    classifier = build_classifier()
    result = await classifier.classify("The new clinic is excellent")
    print(result.sentiment_summary)
"""

import redis.asyncio as redis

from govhub.sentiment.classifier import (
    ClassificationError,
    SentimentClassifier,
    SentimentResult,
    summarize_scores,
)
from govhub.sentiment.config import SentimentConfig
from govhub.sentiment.lexicon import LexiconSentimentClassifier


def build_classifier(
    config: SentimentConfig | None = None,
    redis_client: redis.Redis | None = None,
) -> SentimentClassifier:
    """
    Create the classifier selected by ``config.backend``.

    Args:
        config: Sentiment configuration (uses defaults if None)
        redis_client: Redis client for result caching (optional)

    Returns:
        Configured SentimentClassifier
    """
    config = config or SentimentConfig()

    if config.backend == "http":
        from govhub.sentiment.remote import HttpSentimentClassifier

        return HttpSentimentClassifier(config, redis_client)
    if config.backend == "transformer":
        from govhub.sentiment.transformer import TransformerSentimentClassifier

        return TransformerSentimentClassifier(config, redis_client)
    return LexiconSentimentClassifier(config, redis_client)


__all__ = [
    "ClassificationError",
    "LexiconSentimentClassifier",
    "SentimentClassifier",
    "SentimentConfig",
    "SentimentResult",
    "build_classifier",
    "summarize_scores",
]
