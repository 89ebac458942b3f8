"""PostgreSQL-backed feedback store.

Persists FeedbackRecords in the ``project_feedback`` table via asyncpg.
Ids keep the ``{project_id}-fb-{position}`` scheme: the position is read
and the row inserted inside one transaction holding a per-project
advisory lock, so concurrent appends to the same project cannot collide.
"""

import logging
from typing import Any

from govhub.feedback.errors import FeedbackNotFoundError, ProjectNotFoundError
from govhub.feedback.schemas import FeedbackDraft, FeedbackRecord, make_feedback_id
from govhub.feedback.store import FeedbackStore
from govhub.projects.directory import ProjectDirectory
from govhub.storage.database import Database

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
    CREATE TABLE IF NOT EXISTS project_feedback (
        id TEXT PRIMARY KEY,
        project_id TEXT NOT NULL,
        position INTEGER NOT NULL,
        user_id TEXT,
        author_name TEXT NOT NULL,
        comment TEXT NOT NULL,
        rating SMALLINT CHECK (rating BETWEEN 1 AND 5),
        sentiment_summary TEXT,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        UNIQUE (project_id, position)
    );
    CREATE INDEX IF NOT EXISTS idx_project_feedback_project
        ON project_feedback (project_id, created_at DESC);
    CREATE INDEX IF NOT EXISTS idx_project_feedback_user
        ON project_feedback (user_id, created_at DESC);
"""


class PostgresFeedbackStore(FeedbackStore):
    """Feedback store over PostgreSQL.

    Follows the repository pattern used elsewhere: SQL strings with
    positional parameters, rows converted by module-level helpers.
    """

    def __init__(self, database: Database, directory: ProjectDirectory) -> None:
        self._db = database
        self._directory = directory

    async def ensure_schema(self) -> None:
        """Create the feedback table and indexes if missing."""
        await self._db.apply_schema(SCHEMA_SQL)

    async def _require_project(self, project_id: str) -> None:
        if not await self._directory.exists(project_id):
            raise ProjectNotFoundError(project_id)

    async def append(self, project_id: str, draft: FeedbackDraft) -> FeedbackRecord:
        await self._require_project(project_id)

        async with self._db.locked_transaction(project_id) as conn:
            position = await conn.fetchval(
                "SELECT COALESCE(MAX(position), 0) + 1 "
                "FROM project_feedback WHERE project_id = $1",
                project_id,
            )
            row = await conn.fetchrow(
                """
                INSERT INTO project_feedback (
                    id, project_id, position, user_id,
                    author_name, comment, rating
                ) VALUES ($1, $2, $3, $4, $5, $6, $7)
                RETURNING *
                """,
                make_feedback_id(project_id, position),
                project_id,
                position,
                draft.user_id,
                draft.author_name,
                draft.comment,
                draft.rating,
            )
        return _row_to_record(row)

    async def annotate(
        self,
        project_id: str,
        feedback_id: str,
        sentiment_summary: str,
    ) -> FeedbackRecord:
        await self._require_project(project_id)

        row = await self._db.fetchrow(
            """
            UPDATE project_feedback
            SET sentiment_summary = $3
            WHERE project_id = $1 AND id = $2
            RETURNING *
            """,
            project_id,
            feedback_id,
            sentiment_summary,
        )
        if row is None:
            raise FeedbackNotFoundError(project_id, feedback_id)
        return _row_to_record(row)

    async def get(self, project_id: str, feedback_id: str) -> FeedbackRecord | None:
        row = await self._db.fetchrow(
            "SELECT * FROM project_feedback WHERE project_id = $1 AND id = $2",
            project_id,
            feedback_id,
        )
        return _row_to_record(row) if row else None

    async def list_for_project(self, project_id: str) -> list[FeedbackRecord]:
        await self._require_project(project_id)
        rows = await self._db.fetch(
            """
            SELECT * FROM project_feedback
            WHERE project_id = $1
            ORDER BY created_at DESC
            """,
            project_id,
        )
        return [_row_to_record(row) for row in rows]

    async def list_all(self) -> list[FeedbackRecord]:
        rows = await self._db.fetch(
            "SELECT * FROM project_feedback ORDER BY created_at DESC"
        )
        return [_row_to_record(row) for row in rows]

    async def list_for_user(self, user_id: str) -> list[FeedbackRecord]:
        rows = await self._db.fetch(
            """
            SELECT * FROM project_feedback
            WHERE user_id = $1
            ORDER BY created_at DESC
            """,
            user_id,
        )
        return [_row_to_record(row) for row in rows]

    async def count(self, project_id: str) -> int:
        value = await self._db.fetchval(
            "SELECT COUNT(*) FROM project_feedback WHERE project_id = $1",
            project_id,
        )
        return int(value or 0)


def _row_to_record(row: Any) -> FeedbackRecord:
    """Convert an asyncpg Record to a FeedbackRecord."""
    return FeedbackRecord(
        id=row["id"],
        project_id=row["project_id"],
        author_name=row["author_name"],
        comment=row["comment"],
        rating=row.get("rating"),
        user_id=row.get("user_id"),
        sentiment_summary=row.get("sentiment_summary"),
        created_at=row["created_at"],
    )
