"""Schema definitions for project feedback.

A FeedbackDraft is what a citizen submits; a FeedbackRecord is the
stored form, owned by exactly one project's collection. Records are
appended once and annotated with a sentiment summary afterwards.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

MIN_RATING = 1
MAX_RATING = 5


def make_feedback_id(project_id: str, position: int) -> str:
    """Build a feedback id from its project and 1-based append position."""
    return f"{project_id}-fb-{position}"


def _validate_fields(author_name: str, comment: str, rating: int | None) -> None:
    if not author_name or not author_name.strip():
        raise ValueError("Invalid author_name: must not be blank.")
    if not comment or not comment.strip():
        raise ValueError("Invalid comment: must not be blank.")
    if rating is not None and not (MIN_RATING <= rating <= MAX_RATING):
        raise ValueError(
            f"Invalid rating {rating}. Must be between {MIN_RATING} and {MAX_RATING}."
        )


@dataclass(frozen=True)
class FeedbackDraft:
    """Caller-supplied fields of a feedback submission.

    Attributes:
        author_name: Display name of the submitter.
        comment: Free-text body, required.
        rating: Optional star rating from 1 to 5.
        user_id: Submitting user's id; None for anonymous feedback.
    """

    author_name: str
    comment: str
    rating: int | None = None
    user_id: str | None = None

    def __post_init__(self) -> None:
        _validate_fields(self.author_name, self.comment, self.rating)


@dataclass
class FeedbackRecord:
    """A stored feedback record.

    Attributes:
        id: Unique within the project ({project_id}-fb-{position}).
        project_id: Owning project, immutable.
        author_name: Display name of the submitter.
        comment: Free-text body.
        rating: Optional star rating from 1 to 5.
        user_id: Submitting user's id, or None.
        sentiment_summary: Short tone label, None until annotated.
        created_at: When the record was appended, immutable.
    """

    id: str
    project_id: str
    author_name: str
    comment: str
    rating: int | None = None
    user_id: str | None = None
    sentiment_summary: str | None = None
    created_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    def __post_init__(self) -> None:
        _validate_fields(self.author_name, self.comment, self.rating)

    @classmethod
    def from_draft(
        cls,
        project_id: str,
        position: int,
        draft: FeedbackDraft,
        created_at: datetime | None = None,
    ) -> "FeedbackRecord":
        """Create the record for a draft appended at ``position``."""
        return cls(
            id=make_feedback_id(project_id, position),
            project_id=project_id,
            author_name=draft.author_name,
            comment=draft.comment,
            rating=draft.rating,
            user_id=draft.user_id,
            created_at=created_at or datetime.now(timezone.utc),
        )

    @property
    def is_annotated(self) -> bool:
        return self.sentiment_summary is not None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase shape used by the portal front end."""
        return {
            "id": self.id,
            "projectId": self.project_id,
            "userId": self.user_id,
            "authorName": self.author_name,
            "comment": self.comment,
            "rating": self.rating,
            "sentimentSummary": self.sentiment_summary,
            "createdAt": self.created_at.isoformat(),
        }


def newest_first(records: list[FeedbackRecord]) -> list[FeedbackRecord]:
    """Order records for display, most recent first."""
    return sorted(records, key=lambda r: r.created_at, reverse=True)
