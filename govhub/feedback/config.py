"""Feedback service configuration.

Controls constraints on feedback submission and where view invalidations
are sent. All settings can be overridden via ``FEEDBACK_*`` environment
variables.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FeedbackConfig(BaseSettings):
    """Configuration for the feedback system."""

    model_config = SettingsConfigDict(
        env_prefix="FEEDBACK_",
        case_sensitive=False,
        extra="ignore",
    )

    max_comment_length: int = Field(
        default=2000,
        ge=1,
        le=10000,
        description="Maximum length for feedback comments",
    )
    max_author_name_length: int = Field(
        default=120,
        ge=1,
        le=500,
        description="Maximum length for the submitter's display name",
    )
    view_cache_prefix: str = Field(
        default="govhub:view:",
        description="Redis key prefix for cached rendered views",
    )
    invalidation_channel: str = Field(
        default="govhub:invalidations",
        description="Redis pub/sub channel announcing stale view keys",
    )
