"""
Sentiment classification configuration.

Settings can be overridden via environment variables prefixed with SENTIMENT_.

Example:
    SENTIMENT_BACKEND=http
    SENTIMENT_ENDPOINT_URL=https://nlp.internal/classify
    SENTIMENT_TIMEOUT_SECONDS=5
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SentimentConfig(BaseSettings):
    """Configuration for the sentiment classifier used by the feedback pipeline."""

    model_config = SettingsConfigDict(
        env_prefix="SENTIMENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        protected_namespaces=(),
    )

    backend: Literal["lexicon", "http", "transformer"] = Field(
        default="lexicon",
        description="Which classifier implementation to use",
    )

    # Remote classifier
    endpoint_url: str | None = Field(
        default=None,
        description="URL of the remote text-classification endpoint (http backend)",
    )
    api_key: str | None = Field(
        default=None,
        description="Bearer token sent to the remote endpoint",
    )
    timeout_seconds: float = Field(
        default=10.0,
        gt=0.0,
        le=120.0,
        description="Request timeout for the remote endpoint",
    )

    # Local model
    model_name: str = Field(
        default="cardiffnlp/twitter-roberta-base-sentiment-latest",
        description="HuggingFace model name for the transformer backend",
    )
    device: Literal["auto", "cpu", "cuda", "mps"] = Field(
        default="auto",
        description="Device for model inference (auto detects best available)",
    )
    max_sequence_length: int = Field(
        default=512,
        ge=32,
        le=512,
        description="Maximum token sequence length for the model",
    )

    # Summary labelling
    mixed_threshold: float = Field(
        default=0.25,
        ge=0.0,
        le=0.5,
        description="Positive and negative scores both at or above this yield 'Mixed'",
    )

    # Caching configuration
    cache_enabled: bool = Field(
        default=False,
        description="Enable Redis caching for classification results",
    )
    cache_ttl_hours: int = Field(
        default=168,  # 1 week
        ge=1,
        description="Cache TTL in hours",
    )
    cache_key_prefix: str = Field(
        default="sentiment:",
        description="Redis key prefix for cached sentiment",
    )

    @property
    def cache_ttl_seconds(self) -> int:
        """Get cache TTL in seconds."""
        return self.cache_ttl_hours * 3600
