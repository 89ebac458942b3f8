"""
Request and response models for the GovHub feedback API.

Field names are snake_case in Python and camelCase on the wire to match
the portal front end.
"""

from pydantic import BaseModel, ConfigDict, Field


class CamelModel(BaseModel):
    """Base model accepting and emitting camelCase aliases."""

    model_config = ConfigDict(populate_by_name=True)


class ErrorResponse(BaseModel):
    """Response model for errors."""

    detail: str = Field(..., description="Error message")
    error_type: str = Field(default="error", description="Error type")


# Feedback models


class FeedbackSubmitRequest(CamelModel):
    """Request model for submitting feedback on a project."""

    author_name: str = Field(
        ...,
        alias="authorName",
        min_length=1,
        description="Display name of the submitter",
    )
    comment: str = Field(
        ...,
        min_length=1,
        description="Feedback text",
    )
    rating: int | None = Field(
        default=None,
        ge=1,
        le=5,
        description="Optional star rating from 1 to 5",
    )
    user_id: str | None = Field(
        default=None,
        alias="userId",
        max_length=200,
        description="Submitting user's id; omit for anonymous feedback",
    )


class FeedbackItem(CamelModel):
    """Single feedback record."""

    id: str = Field(..., description="Feedback identifier, unique within the project")
    project_id: str = Field(..., alias="projectId", description="Owning project")
    user_id: str | None = Field(default=None, alias="userId", description="Submitting user")
    author_name: str = Field(..., alias="authorName", description="Submitter display name")
    comment: str = Field(..., description="Feedback text")
    rating: int | None = Field(default=None, description="Star rating (1-5)")
    sentiment_summary: str | None = Field(
        default=None,
        alias="sentimentSummary",
        description="Short sentiment label, absent until annotated",
    )
    created_at: str = Field(..., alias="createdAt", description="Submission timestamp (ISO format)")


class FeedbackWithProjectItem(FeedbackItem):
    """Feedback record with its project's title, for listings."""

    project_title: str = Field(..., alias="projectTitle", description="Title of the project")


class SubmitFeedbackResponse(CamelModel):
    """Response model for a feedback submission."""

    success: bool = Field(..., description="Whether the submission fully succeeded")
    message: str = Field(..., description="Message to show the submitter")
    feedback: FeedbackItem | None = Field(default=None, description="Stored feedback record")
    sentiment_summary: str | None = Field(
        default=None,
        alias="sentimentSummary",
        description="Sentiment summary of the comment",
    )
    latency_ms: float = Field(..., description="Processing latency in milliseconds")


class FeedbackSummaryItem(CamelModel):
    """Aggregate over a set of feedback records."""

    count: int = Field(..., description="Number of records")
    avg_rating: float | None = Field(
        default=None,
        alias="avgRating",
        description="Average rating of rated records",
    )
    sentiment_distribution: dict[str, int] = Field(
        default_factory=dict,
        alias="sentimentDistribution",
        description="Records per sentiment summary",
    )


class ProjectFeedbackResponse(CamelModel):
    """Response model for a project's feedback list."""

    project_id: str = Field(..., alias="projectId")
    feedback: list[FeedbackItem] = Field(..., description="Feedback, newest first")
    summary: FeedbackSummaryItem
    latency_ms: float = Field(..., description="Processing latency in milliseconds")


class FeedbackListResponse(CamelModel):
    """Response model for feedback listings with project titles."""

    feedback: list[FeedbackWithProjectItem] = Field(..., description="Feedback, newest first")
    total: int = Field(..., description="Number of records returned")
    latency_ms: float = Field(..., description="Processing latency in milliseconds")


class UserStatsResponse(CamelModel):
    """Dashboard statistics for a single user."""

    user_id: str = Field(..., alias="userId")
    feedback_submitted: int = Field(..., alias="feedbackSubmitted")
    average_rating: float | None = Field(default=None, alias="averageRating")


# Project models


class NamedRef(BaseModel):
    id: str
    name: str


class ProjectItem(CamelModel):
    """Single project."""

    id: str
    title: str
    subtitle: str
    ministry: NamedRef
    state: NamedRef
    status: str
    description: str
    start_date: str = Field(..., alias="startDate")
    expected_end_date: str | None = Field(default=None, alias="expectedEndDate")
    budget: float | None = None
    expenditure: float | None = None
    tags: list[str] = Field(default_factory=list)
    last_updated_at: str = Field(..., alias="lastUpdatedAt")


class ProjectListResponse(BaseModel):
    """Response model for project listing."""

    projects: list[ProjectItem]
    total: int


# Health models


class ComponentHealth(BaseModel):
    """Health status of a single component."""

    status: str = Field(..., description="healthy or unhealthy")
    latency_ms: float | None = Field(default=None, description="Check latency")
    details: dict[str, str] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(..., description="Overall status: healthy, degraded, or unhealthy")
    version: str
    components: dict[str, ComponentHealth] = Field(default_factory=dict)
