"""
Feedback submission pipeline.

Orchestrates one submission as a sequential unit of work:

    pending -> persisted -> annotated -> completed

1. Append the draft to the project's feedback collection. An unknown
   project fails fast with nothing written.
2. Classify the comment. A classifier failure is reported to the caller
   as a failure, but the record stays persisted without a summary.
3. Annotate the record with the sentiment summary.
4. Invalidate the project page and the feedback listings.

No exception crosses ``submit``: every outcome is a SubmitSuccess or a
SubmitFailure whose ``message`` is shown to the submitter verbatim.
"""

import enum
from dataclasses import dataclass, field
from typing import Any

import structlog

from govhub.feedback.errors import FeedbackNotFoundError, ProjectNotFoundError
from govhub.feedback.invalidation import ViewInvalidator, feedback_view_keys
from govhub.feedback.schemas import FeedbackDraft, FeedbackRecord
from govhub.feedback.store import FeedbackStore
from govhub.observability.metrics import get_metrics
from govhub.sentiment.classifier import SentimentClassifier

logger = structlog.get_logger(__name__)

SUCCESS_MESSAGE = "Feedback submitted successfully!"
SAVE_FAILED_MESSAGE = "Failed to save feedback."
SUBMIT_FAILED_PREFIX = "Failed to submit feedback: "


class FailureKind(str, enum.Enum):
    """Why a submission failed."""

    PROJECT_NOT_FOUND = "project_not_found"
    CLASSIFICATION_FAILED = "classification_failed"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class SubmitSuccess:
    """Feedback persisted, annotated, and views invalidated."""

    feedback: FeedbackRecord
    sentiment_summary: str
    message: str = SUCCESS_MESSAGE

    @property
    def success(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": True,
            "message": self.message,
            "feedback": self.feedback.to_dict(),
            "sentimentSummary": self.sentiment_summary,
        }


@dataclass(frozen=True)
class SubmitFailure:
    """Submission failed.

    ``feedback`` is set when the record was persisted before the failure
    (classification or annotation failures), so callers can tell data was
    not lost.
    """

    kind: FailureKind
    message: str
    feedback: FeedbackRecord | None = field(default=None)

    @property
    def success(self) -> bool:
        return False

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"success": False, "message": self.message}
        if self.feedback is not None:
            result["feedback"] = self.feedback.to_dict()
        return result


SubmitResult = SubmitSuccess | SubmitFailure


class FeedbackPipeline:
    """
    Single entry point for submitting project feedback.

    Usage:
        pipeline = FeedbackPipeline(store, classifier, invalidator)
        result = await pipeline.submit("p1", FeedbackDraft("Aisha Bello", "Great progress", 5))
        if result.success:
            print(result.sentiment_summary)
        else:
            print(result.message)
    """

    def __init__(
        self,
        store: FeedbackStore,
        classifier: SentimentClassifier,
        invalidator: ViewInvalidator,
    ) -> None:
        self._store = store
        self._classifier = classifier
        self._invalidator = invalidator

    @property
    def store(self) -> FeedbackStore:
        return self._store

    @property
    def classifier(self) -> SentimentClassifier:
        return self._classifier

    async def submit(self, project_id: str, draft: FeedbackDraft) -> SubmitResult:
        """
        Submit feedback for a project.

        Args:
            project_id: Project being commented on
            draft: Validated submission fields

        Returns:
            SubmitSuccess or SubmitFailure
        """
        log = logger.bind(project_id=project_id)
        metrics = get_metrics()

        try:
            result = await self._run(project_id, draft, log)
        except Exception as e:
            log.error("Feedback submission failed unexpectedly", error=str(e), exc_info=True)
            result = SubmitFailure(
                kind=FailureKind.UNEXPECTED,
                message=f"{SUBMIT_FAILED_PREFIX}{e}",
            )

        outcome = "success" if result.success else result.kind.value  # type: ignore[union-attr]
        metrics.record_submission(outcome)
        return result

    async def _run(
        self,
        project_id: str,
        draft: FeedbackDraft,
        log: structlog.stdlib.BoundLogger,
    ) -> SubmitResult:
        try:
            record = await self._store.append(project_id, draft)
        except ProjectNotFoundError:
            log.warning("Feedback rejected: project not found")
            return SubmitFailure(
                kind=FailureKind.PROJECT_NOT_FOUND,
                message=SAVE_FAILED_MESSAGE,
            )

        log = log.bind(feedback_id=record.id)
        log.info("Feedback persisted")

        try:
            sentiment = await self._classifier.classify(draft.comment)
        except Exception as e:
            log.error("Sentiment classification failed", error=str(e))
            # The record stays persisted, so its views are stale regardless
            await self._invalidate(project_id, log)
            return SubmitFailure(
                kind=FailureKind.CLASSIFICATION_FAILED,
                message=f"{SUBMIT_FAILED_PREFIX}{e}",
                feedback=record,
            )

        summary = sentiment.sentiment_summary
        try:
            record = await self._store.annotate(project_id, record.id, summary)
        except (ProjectNotFoundError, FeedbackNotFoundError) as e:
            log.warning("Feedback vanished before annotation", error=str(e))
            record.sentiment_summary = summary
        except Exception as e:
            log.error("Feedback annotation failed", error=str(e), exc_info=True)
            await self._invalidate(project_id, log)
            return SubmitFailure(
                kind=FailureKind.UNEXPECTED,
                message=f"{SUBMIT_FAILED_PREFIX}{e}",
                feedback=record,
            )
        else:
            log.info("Feedback annotated", sentiment_summary=summary)

        await self._invalidate(project_id, log)

        log.info("Feedback submission completed")
        return SubmitSuccess(feedback=record, sentiment_summary=summary)

    async def _invalidate(
        self,
        project_id: str,
        log: structlog.stdlib.BoundLogger,
    ) -> None:
        try:
            await self._invalidator.invalidate(feedback_view_keys(project_id))
        except Exception as e:
            log.warning("View invalidation failed", error=str(e))
