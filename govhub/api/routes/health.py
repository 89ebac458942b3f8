"""
Health check endpoint.
"""

import time

import structlog
from fastapi import APIRouter, Depends

from govhub import __version__
from govhub.api.dependencies import get_feedback_store, get_sentiment_classifier
from govhub.api.models import ComponentHealth, HealthResponse
from govhub.feedback.store import FeedbackStore
from govhub.sentiment.classifier import SentimentClassifier

router = APIRouter()
logger = structlog.get_logger(__name__)

# Probe project id that is never expected to exist
_PROBE_PROJECT_ID = "__health__"


async def _check_store(store: FeedbackStore) -> ComponentHealth:
    """Check the feedback store answers a trivial query."""
    start = time.perf_counter()
    try:
        await store.count(_PROBE_PROJECT_ID)
        latency_ms = (time.perf_counter() - start) * 1000
        return ComponentHealth(
            status="healthy",
            latency_ms=round(latency_ms, 2),
            details={"backend": type(store).__name__},
        )
    except Exception as e:
        latency_ms = (time.perf_counter() - start) * 1000
        return ComponentHealth(
            status="unhealthy",
            latency_ms=round(latency_ms, 2),
            details={"error": str(e)},
        )


async def _check_classifier(classifier: SentimentClassifier) -> ComponentHealth:
    """Ask the classifier backend whether it can serve requests."""
    start = time.perf_counter()
    try:
        details = await classifier.health_check()
        status = "healthy"
    except Exception as e:
        details = {"backend": classifier.name, "error": str(e)}
        status = "unhealthy"
    latency_ms = (time.perf_counter() - start) * 1000
    return ComponentHealth(status=status, latency_ms=round(latency_ms, 2), details=details)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health",
)
async def health(
    store: FeedbackStore = Depends(get_feedback_store),
    classifier: SentimentClassifier = Depends(get_sentiment_classifier),
) -> HealthResponse:
    components = {
        "feedback_store": await _check_store(store),
        "sentiment_classifier": await _check_classifier(classifier),
    }

    overall = "healthy"
    if any(c.status != "healthy" for c in components.values()):
        overall = "degraded"
        logger.warning("Health check degraded", components=list(components))

    return HealthResponse(status=overall, version=__version__, components=components)
