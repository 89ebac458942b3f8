"""Citizen feedback on government projects.

Components:
- FeedbackDraft / FeedbackRecord: Submitted and stored feedback
- FeedbackStore: Store ABC, with in-memory and PostgreSQL implementations
- FeedbackPipeline: append -> classify -> annotate -> invalidate
- ViewInvalidator: Marks cached project and listing views stale
- FeedbackConfig: Pydantic settings for feedback constraints
"""

from govhub.feedback.config import FeedbackConfig
from govhub.feedback.errors import FeedbackError, FeedbackNotFoundError, ProjectNotFoundError
from govhub.feedback.invalidation import (
    InMemoryViewCache,
    RedisViewInvalidator,
    ViewInvalidator,
    feedback_view_keys,
    project_view_key,
)
from govhub.feedback.pipeline import (
    FailureKind,
    FeedbackPipeline,
    SubmitFailure,
    SubmitResult,
    SubmitSuccess,
)
from govhub.feedback.schemas import FeedbackDraft, FeedbackRecord
from govhub.feedback.store import FeedbackStore, InMemoryFeedbackStore

__all__ = [
    "FailureKind",
    "FeedbackConfig",
    "FeedbackDraft",
    "FeedbackError",
    "FeedbackNotFoundError",
    "FeedbackPipeline",
    "FeedbackRecord",
    "FeedbackStore",
    "InMemoryFeedbackStore",
    "InMemoryViewCache",
    "ProjectNotFoundError",
    "RedisViewInvalidator",
    "SubmitFailure",
    "SubmitResult",
    "SubmitSuccess",
    "ViewInvalidator",
    "feedback_view_keys",
    "project_view_key",
]
