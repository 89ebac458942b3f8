"""
Prometheus metrics for the feedback pipeline.

Defines and exposes metrics for:
- Feedback submissions by outcome
- Sentiment classification counts and latency
- View invalidations

Metrics are exposed via HTTP endpoint for Prometheus scraping.
"""

import logging

from prometheus_client import (
    REGISTRY,
    CollectorRegistry,
    Counter,
    Histogram,
    start_http_server,
)

from govhub.config.settings import get_settings

logger = logging.getLogger(__name__)

# Buckets for latency histograms (in seconds)
LATENCY_BUCKETS = (0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)


class MetricsCollector:
    """
    Prometheus metrics collector for the GovHub feedback service.

    Usage:
        metrics = MetricsCollector()
        metrics.start_server()

        metrics.record_submission("success")
        metrics.record_classification("lexicon", "Positive", 0.002)
    """

    def __init__(self, registry: CollectorRegistry | None = None):
        """
        Initialize Prometheus metrics.

        Args:
            registry: Registry to register into (defaults to the global one).
                Tests pass a fresh CollectorRegistry to avoid duplicates.
        """
        self._registry = registry or REGISTRY

        self.feedback_submissions = Counter(
            "govhub_feedback_submissions_total",
            "Total feedback submissions by outcome",
            ["outcome"],  # success, project_not_found, classification_failed, unexpected
            registry=self._registry,
        )

        self.sentiment_classifications = Counter(
            "govhub_sentiment_classifications_total",
            "Total sentiment classifications performed",
            ["backend", "summary"],
            registry=self._registry,
        )

        self.sentiment_errors = Counter(
            "govhub_sentiment_errors_total",
            "Total sentiment classification failures",
            ["backend"],
            registry=self._registry,
        )

        self.sentiment_latency = Histogram(
            "govhub_sentiment_latency_seconds",
            "Time to classify a comment",
            ["backend"],
            buckets=LATENCY_BUCKETS,
            registry=self._registry,
        )

        self.view_invalidations = Counter(
            "govhub_view_invalidations_total",
            "Total view keys marked stale",
            ["backend"],
            registry=self._registry,
        )

        self._server_started = False

    def start_server(self, port: int | None = None) -> None:
        """
        Start Prometheus HTTP server for metrics scraping.

        Args:
            port: Port to listen on (defaults to settings.metrics_port)
        """
        if self._server_started:
            return

        port = port or get_settings().metrics_port
        start_http_server(port, registry=self._registry)
        self._server_started = True
        logger.info(f"Metrics server started on port {port}")

    def record_submission(self, outcome: str) -> None:
        """Record the outcome of one pipeline submission."""
        self.feedback_submissions.labels(outcome=outcome).inc()

    def record_classification(
        self,
        backend: str,
        summary: str,
        latency_seconds: float,
    ) -> None:
        """
        Record a successful sentiment classification.

        Args:
            backend: Classifier backend name
            summary: Resulting sentiment summary
            latency_seconds: Time spent in the classifier
        """
        self.sentiment_classifications.labels(backend=backend, summary=summary).inc()
        self.sentiment_latency.labels(backend=backend).observe(latency_seconds)

    def record_classification_error(self, backend: str) -> None:
        """Record a failed sentiment classification."""
        self.sentiment_errors.labels(backend=backend).inc()

    def record_invalidation(self, backend: str, key_count: int) -> None:
        """Record view keys marked stale."""
        self.view_invalidations.labels(backend=backend).inc(key_count)


# Global metrics instance
_metrics: MetricsCollector | None = None


def get_metrics() -> MetricsCollector:
    """Get global metrics collector instance."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics
