"""
Sentiment classifier using a Hugging Face text-classification model.

Uses lazy initialization to defer model loading until first use, and
runs inference in a worker thread so the event loop is not blocked.
Requires the ``ml`` extra (transformers + torch).
"""

import asyncio
import threading
from typing import Any

import structlog

from govhub.sentiment.classifier import SentimentClassifier, SentimentResult, summarize_scores
from govhub.sentiment.config import SentimentConfig

logger = structlog.get_logger(__name__)

# Normalise the label vocabularies of common sentiment checkpoints
LABEL_ALIASES = {
    "positive": "positive",
    "pos": "positive",
    "label_2": "positive",
    "negative": "negative",
    "neg": "negative",
    "label_0": "negative",
    "neutral": "neutral",
    "neu": "neutral",
    "label_1": "neutral",
}


class TransformerSentimentClassifier(SentimentClassifier):
    """
    Local model classifier.

    Model loading is deferred until the first classify() call.
    """

    def __init__(self, config: SentimentConfig | None = None, redis_client=None):
        super().__init__(config, redis_client)
        self._pipeline: Any = None
        self._load_lock = threading.Lock()

    @property
    def name(self) -> str:
        return "transformer"

    @property
    def is_initialized(self) -> bool:
        """Check if model is loaded."""
        return self._pipeline is not None

    def _resolve_device(self) -> int | str:
        if self._config.device != "auto":
            return self._config.device

        import torch

        if torch.cuda.is_available():
            return 0
        if torch.backends.mps.is_available():
            return "mps"
        return -1

    def _load_pipeline(self) -> Any:
        """Load the text-classification pipeline."""
        from transformers import pipeline

        device = self._resolve_device()
        logger.info(
            "Loading sentiment model",
            model=self._config.model_name,
            device=str(device),
        )
        return pipeline(
            "text-classification",
            model=self._config.model_name,
            top_k=None,
            truncation=True,
            max_length=self._config.max_sequence_length,
            device=device,
        )

    def _initialize(self) -> None:
        if self._pipeline is not None:
            return
        with self._load_lock:
            if self._pipeline is None:
                self._pipeline = self._load_pipeline()

    def _predict_sync(self, text: str) -> SentimentResult:
        self._initialize()

        if not text.strip():
            scores = {"positive": 0.0, "neutral": 1.0, "negative": 0.0}
        else:
            outputs = self._pipeline([text])[0]
            scores = {"positive": 0.0, "neutral": 0.0, "negative": 0.0}
            for item in outputs:
                label = LABEL_ALIASES.get(str(item["label"]).lower())
                if label is not None:
                    scores[label] = float(item["score"])

        label, summary = summarize_scores(scores, self._config.mixed_threshold)
        return SentimentResult(
            label=label,
            confidence=scores[label],
            sentiment_summary=summary,
            scores=scores,
        )

    async def _predict(self, text: str) -> SentimentResult:
        return await asyncio.to_thread(self._predict_sync, text)

    async def health_check(self) -> dict[str, str]:
        return {
            "backend": self.name,
            "model": self._config.model_name,
            "loaded": str(self.is_initialized).lower(),
        }

    async def close(self) -> None:
        self._pipeline = None
