"""
Dependency injection for FastAPI endpoints.

Services are built lazily on first request from Settings and kept as
module-level singletons; tests replace them via dependency_overrides.
"""

import redis.asyncio as redis

from govhub.config.settings import get_settings
from govhub.feedback.config import FeedbackConfig
from govhub.feedback.invalidation import InMemoryViewCache, RedisViewInvalidator, ViewInvalidator
from govhub.feedback.pipeline import FeedbackPipeline
from govhub.feedback.store import FeedbackStore, InMemoryFeedbackStore
from govhub.projects.directory import (
    InMemoryProjectDirectory,
    PostgresProjectDirectory,
    ProjectDirectory,
)
from govhub.sentiment import SentimentClassifier, SentimentConfig, build_classifier
from govhub.storage.database import close_database, get_database

# Global service instances (initialized on first request)
_redis_client: redis.Redis | None = None
_project_directory: ProjectDirectory | None = None
_feedback_store: FeedbackStore | None = None
_sentiment_classifier: SentimentClassifier | None = None
_view_invalidator: ViewInvalidator | None = None
_feedback_pipeline: FeedbackPipeline | None = None


def _get_redis() -> redis.Redis:
    global _redis_client

    if _redis_client is None:
        settings = get_settings()
        _redis_client = redis.from_url(
            str(settings.redis_url),
            encoding="utf-8",
            decode_responses=True,
        )
    return _redis_client


async def get_project_directory() -> ProjectDirectory:
    """Get project directory for the configured storage backend."""
    global _project_directory

    if _project_directory is None:
        if get_settings().storage_backend == "postgres":
            _project_directory = PostgresProjectDirectory(await get_database())
        else:
            _project_directory = InMemoryProjectDirectory.seeded()

    return _project_directory


async def get_feedback_store() -> FeedbackStore:
    """Get feedback store for the configured storage backend."""
    global _feedback_store

    if _feedback_store is None:
        directory = await get_project_directory()
        if get_settings().storage_backend == "postgres":
            from govhub.feedback.repository import PostgresFeedbackStore

            store = PostgresFeedbackStore(await get_database(), directory)
            await store.ensure_schema()
            _feedback_store = store
        else:
            _feedback_store = InMemoryFeedbackStore(directory)

    return _feedback_store


async def get_sentiment_classifier() -> SentimentClassifier:
    """Get sentiment classifier, with Redis caching when enabled."""
    global _sentiment_classifier

    if _sentiment_classifier is None:
        config = SentimentConfig()
        redis_client = _get_redis() if config.cache_enabled else None
        _sentiment_classifier = build_classifier(config, redis_client)

    return _sentiment_classifier


async def get_view_invalidator() -> ViewInvalidator:
    """Get view invalidator for the configured backend."""
    global _view_invalidator

    if _view_invalidator is None:
        if get_settings().invalidation_backend == "redis":
            _view_invalidator = RedisViewInvalidator(_get_redis(), FeedbackConfig())
        else:
            _view_invalidator = InMemoryViewCache()

    return _view_invalidator


async def get_feedback_pipeline() -> FeedbackPipeline:
    """Get the feedback submission pipeline."""
    global _feedback_pipeline

    if _feedback_pipeline is None:
        _feedback_pipeline = FeedbackPipeline(
            store=await get_feedback_store(),
            classifier=await get_sentiment_classifier(),
            invalidator=await get_view_invalidator(),
        )

    return _feedback_pipeline


async def cleanup_dependencies() -> None:
    """Release singletons on shutdown."""
    global _redis_client, _project_directory, _feedback_store
    global _sentiment_classifier, _view_invalidator, _feedback_pipeline

    if _sentiment_classifier is not None:
        await _sentiment_classifier.close()

    if _redis_client is not None:
        await _redis_client.aclose()

    await close_database()

    _redis_client = None
    _project_directory = None
    _feedback_store = None
    _sentiment_classifier = None
    _view_invalidator = None
    _feedback_pipeline = None
