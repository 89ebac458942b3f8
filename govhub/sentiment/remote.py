"""
Remote sentiment classifier over HTTP.

Delegates classification to an external text-classification service.
The request body is ``{"text": ...}``; the service may answer with
either a ready summary::

    {"sentimentSummary": "Positive"}

or class scores::

    {"label": "positive", "scores": {"positive": 0.91, "neutral": 0.07, "negative": 0.02}}

Creates a new ``httpx.AsyncClient`` per call (short-lived, no pooling)
unless a client is injected.
"""

from typing import Any

import httpx

from govhub.sentiment.classifier import (
    SUMMARY_LABELS,
    ClassificationError,
    SentimentClassifier,
    SentimentResult,
    normalize_summary,
    summarize_scores,
)
from govhub.sentiment.config import SentimentConfig


class HttpSentimentClassifier(SentimentClassifier):
    """Classifier calling a remote endpoint configured by SENTIMENT_ENDPOINT_URL."""

    def __init__(
        self,
        config: SentimentConfig | None = None,
        redis_client=None,
        http_client: httpx.AsyncClient | None = None,
    ):
        super().__init__(config, redis_client)
        if not self._config.endpoint_url:
            raise ValueError("SENTIMENT_ENDPOINT_URL is required for the http backend")
        self._http_client = http_client

    @property
    def name(self) -> str:
        return "http"

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._config.api_key:
            headers["Authorization"] = f"Bearer {self._config.api_key}"
        return headers

    async def _post(self, client: httpx.AsyncClient, text: str) -> httpx.Response:
        return await client.post(
            self._config.endpoint_url,  # type: ignore[arg-type]
            json={"text": text},
            headers=self._headers(),
        )

    async def _predict(self, text: str) -> SentimentResult:
        try:
            if self._http_client is not None:
                resp = await self._post(self._http_client, text)
            else:
                async with httpx.AsyncClient(timeout=self._config.timeout_seconds) as client:
                    resp = await self._post(client, text)
        except httpx.TimeoutException as e:
            raise ClassificationError("Sentiment service timed out") from e
        except httpx.HTTPError as e:
            raise ClassificationError(f"Sentiment service unreachable: {e}") from e

        if not resp.is_success:
            raise ClassificationError(
                f"Sentiment service returned {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            payload = resp.json()
        except ValueError as e:
            raise ClassificationError("Sentiment service returned invalid JSON") from e

        return self._parse_payload(payload)

    def _parse_payload(self, payload: Any) -> SentimentResult:
        if not isinstance(payload, dict):
            raise ClassificationError("Sentiment service returned an unexpected payload")

        scores = {
            str(k).lower(): float(v)
            for k, v in (payload.get("scores") or {}).items()
        }
        summary = payload.get("sentimentSummary") or payload.get("sentiment_summary")
        label = payload.get("label")

        if summary:
            label = (label or str(summary)).lower()
            confidence = scores.get(label, float(payload.get("confidence", 1.0)))
            return SentimentResult(
                label=label,
                confidence=confidence,
                sentiment_summary=normalize_summary(str(summary)),
                scores=scores,
            )

        if scores:
            label, summary = summarize_scores(scores, self._config.mixed_threshold)
            return SentimentResult(
                label=label,
                confidence=scores.get(label, 0.0),
                sentiment_summary=summary,
                scores=scores,
            )

        if label and str(label).lower() in SUMMARY_LABELS:
            label = str(label).lower()
            return SentimentResult(
                label=label,
                confidence=float(payload.get("confidence", 1.0)),
                sentiment_summary=SUMMARY_LABELS[label],
                scores=scores,
            )

        raise ClassificationError("Sentiment service response missing sentiment")

    async def health_check(self) -> dict[str, str]:
        """Classify a short fixed text against the remote endpoint."""
        result = await self._predict("ok")
        return {
            "backend": self.name,
            "endpoint": self._config.endpoint_url or "",
            "summary": result.sentiment_summary,
        }
