"""View invalidation signalling.

After feedback changes, rendered views of the project page and the
feedback listings are stale. Invalidators mark those views by key; the
view layer recomputes them on its next read. Nothing here guarantees
when that read happens.

Pattern: ViewInvalidator ABC with an in-memory cache (single process,
tests, CLI) and a Redis implementation (shared cache across workers).
"""

import logging
from abc import ABC, abstractmethod
from collections import Counter
from collections.abc import Iterable
from typing import Any

import redis.asyncio as redis

from govhub.feedback.config import FeedbackConfig
from govhub.observability.metrics import get_metrics

logger = logging.getLogger(__name__)

ADMIN_FEEDBACK_VIEW_KEY = "/dashboard/admin/manage-feedback"
USER_FEEDBACK_VIEW_KEY = "/dashboard/user/feedback"


def project_view_key(project_id: str) -> str:
    """Key of the public project page, which embeds its feedback."""
    return f"/projects/{project_id}"


def feedback_view_keys(project_id: str) -> list[str]:
    """All view keys made stale by a feedback change on a project."""
    return [
        project_view_key(project_id),
        ADMIN_FEEDBACK_VIEW_KEY,
        USER_FEEDBACK_VIEW_KEY,
    ]


class ViewInvalidator(ABC):
    """Abstract base for marking cached views stale."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend identifier (e.g. 'memory', 'redis')."""

    @abstractmethod
    async def invalidate(self, keys: Iterable[str]) -> None:
        """Mark every key in ``keys`` as stale."""


class InMemoryViewCache(ViewInvalidator):
    """Process-local view cache that can be invalidated by key.

    Cached payloads are dropped on invalidation and the key is flagged
    stale until a fresh payload is stored with put().
    """

    def __init__(self) -> None:
        self._views: dict[str, Any] = {}
        self._stale: set[str] = set()
        self._invalidations: Counter[str] = Counter()

    @property
    def name(self) -> str:
        return "memory"

    def put(self, key: str, payload: Any) -> None:
        self._views[key] = payload
        self._stale.discard(key)

    def get(self, key: str) -> Any | None:
        return self._views.get(key)

    def is_stale(self, key: str) -> bool:
        return key in self._stale

    def invalidation_count(self, key: str) -> int:
        return self._invalidations[key]

    @property
    def stale_keys(self) -> frozenset[str]:
        return frozenset(self._stale)

    async def invalidate(self, keys: Iterable[str]) -> None:
        keys = list(keys)
        for key in keys:
            self._views.pop(key, None)
            self._stale.add(key)
            self._invalidations[key] += 1
        get_metrics().record_invalidation(self.name, len(keys))
        logger.debug(f"Invalidated views: {keys}")


class RedisViewInvalidator(ViewInvalidator):
    """Invalidates views cached in Redis.

    Deletes ``{prefix}{key}`` entries and publishes the stale keys on a
    pub/sub channel so view layers in other processes can react.
    """

    def __init__(
        self,
        redis_client: redis.Redis,
        config: FeedbackConfig | None = None,
    ) -> None:
        self._redis = redis_client
        self._config = config or FeedbackConfig()

    @property
    def name(self) -> str:
        return "redis"

    async def invalidate(self, keys: Iterable[str]) -> None:
        keys = list(keys)
        if not keys:
            return

        prefixed = [f"{self._config.view_cache_prefix}{k}" for k in keys]
        await self._redis.delete(*prefixed)
        for key in keys:
            await self._redis.publish(self._config.invalidation_channel, key)

        get_metrics().record_invalidation(self.name, len(keys))
        logger.debug(f"Invalidated {len(keys)} views in Redis")
