"""Observability layer - logging and metrics."""

from govhub.observability.logging import setup_logging
from govhub.observability.metrics import MetricsCollector, get_metrics

__all__ = ["setup_logging", "MetricsCollector", "get_metrics"]
