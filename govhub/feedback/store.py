"""Feedback store interface and in-memory implementation.

The store groups feedback records by project. Records are appended once
and may be annotated with a sentiment summary afterwards; deletion and
editing belong to the admin surface and are not offered here.

Every read returns copies so callers can never mutate stored state.
"""

import asyncio
import dataclasses
import logging
from abc import ABC, abstractmethod

from govhub.feedback.errors import FeedbackNotFoundError, ProjectNotFoundError
from govhub.feedback.schemas import FeedbackDraft, FeedbackRecord, newest_first
from govhub.projects.directory import ProjectDirectory

logger = logging.getLogger(__name__)


class FeedbackStore(ABC):
    """Abstract feedback persistence grouped by project."""

    @abstractmethod
    async def append(self, project_id: str, draft: FeedbackDraft) -> FeedbackRecord:
        """Persist a new record for a draft.

        Args:
            project_id: Owning project.
            draft: Validated submission fields.

        Returns:
            The stored record with ``id`` and ``created_at`` assigned.

        Raises:
            ProjectNotFoundError: If the project does not exist. Nothing
                is written in that case.
        """

    @abstractmethod
    async def annotate(
        self,
        project_id: str,
        feedback_id: str,
        sentiment_summary: str,
    ) -> FeedbackRecord:
        """Set a record's sentiment summary (last write wins).

        Raises:
            ProjectNotFoundError: If the project does not exist.
            FeedbackNotFoundError: If the record is not in the project.
        """

    @abstractmethod
    async def get(self, project_id: str, feedback_id: str) -> FeedbackRecord | None:
        """Return a single record, or None if absent."""

    @abstractmethod
    async def list_for_project(self, project_id: str) -> list[FeedbackRecord]:
        """Return a project's feedback, newest first.

        Raises:
            ProjectNotFoundError: If the project does not exist.
        """

    @abstractmethod
    async def list_all(self) -> list[FeedbackRecord]:
        """Return all feedback across projects, newest first."""

    @abstractmethod
    async def list_for_user(self, user_id: str) -> list[FeedbackRecord]:
        """Return feedback submitted by a user, newest first."""

    @abstractmethod
    async def count(self, project_id: str) -> int:
        """Return how many records a project has (0 if unknown)."""


class InMemoryFeedbackStore(FeedbackStore):
    """Feedback store held in process memory.

    Each project's collection has its own asyncio.Lock so appends and
    annotations on one project are atomic with respect to each other,
    while different projects never contend. No lock is held while the
    caller awaits anything else.

    Usage:
        directory = InMemoryProjectDirectory.seeded()
        store = InMemoryFeedbackStore(directory)
        record = await store.append("p1", FeedbackDraft("Aisha", "Great"))
    """

    def __init__(self, directory: ProjectDirectory) -> None:
        self._directory = directory
        self._collections: dict[str, list[FeedbackRecord]] = {}
        self._next_position: dict[str, int] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def _lock_for(self, project_id: str) -> asyncio.Lock:
        return self._locks.setdefault(project_id, asyncio.Lock())

    async def _require_project(self, project_id: str) -> None:
        if not await self._directory.exists(project_id):
            raise ProjectNotFoundError(project_id)

    async def append(self, project_id: str, draft: FeedbackDraft) -> FeedbackRecord:
        await self._require_project(project_id)

        async with self._lock_for(project_id):
            position = self._next_position.get(project_id, 0) + 1
            record = FeedbackRecord.from_draft(project_id, position, draft)
            self._collections.setdefault(project_id, []).append(record)
            self._next_position[project_id] = position

        logger.debug(f"Appended feedback {record.id} to project {project_id}")
        return dataclasses.replace(record)

    async def annotate(
        self,
        project_id: str,
        feedback_id: str,
        sentiment_summary: str,
    ) -> FeedbackRecord:
        await self._require_project(project_id)

        async with self._lock_for(project_id):
            for record in self._collections.get(project_id, []):
                if record.id == feedback_id:
                    record.sentiment_summary = sentiment_summary
                    return dataclasses.replace(record)

        raise FeedbackNotFoundError(project_id, feedback_id)

    async def get(self, project_id: str, feedback_id: str) -> FeedbackRecord | None:
        for record in self._collections.get(project_id, []):
            if record.id == feedback_id:
                return dataclasses.replace(record)
        return None

    async def list_for_project(self, project_id: str) -> list[FeedbackRecord]:
        await self._require_project(project_id)
        records = self._collections.get(project_id, [])
        return newest_first([dataclasses.replace(r) for r in records])

    async def list_all(self) -> list[FeedbackRecord]:
        records = [
            dataclasses.replace(r)
            for collection in self._collections.values()
            for r in collection
        ]
        return newest_first(records)

    async def list_for_user(self, user_id: str) -> list[FeedbackRecord]:
        records = [
            dataclasses.replace(r)
            for collection in self._collections.values()
            for r in collection
            if r.user_id == user_id
        ]
        return newest_first(records)

    async def count(self, project_id: str) -> int:
        return len(self._collections.get(project_id, []))

    @property
    def total_count(self) -> int:
        """Total records across all projects."""
        return sum(len(c) for c in self._collections.values())
