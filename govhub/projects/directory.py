"""Project lookup used to validate feedback targets.

The feedback pipeline only needs to know whether a project exists (and
its title for listings), so the directory is a narrow read-only
interface with an in-memory implementation seeded from sample data and
a PostgreSQL implementation over the ``projects`` table.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

from govhub.projects.schemas import Ministry, Project, State
from govhub.projects.seed_data import MINISTRIES, STATES, seed_projects
from govhub.storage.database import Database

logger = logging.getLogger(__name__)


class ProjectDirectory(ABC):
    """Abstract read-only project lookup."""

    @abstractmethod
    async def get_by_id(self, project_id: str) -> Project | None:
        """Return the project, or None if it does not exist."""

    @abstractmethod
    async def list_all(self) -> list[Project]:
        """Return all projects, most recently updated first."""

    async def exists(self, project_id: str) -> bool:
        return await self.get_by_id(project_id) is not None


class InMemoryProjectDirectory(ProjectDirectory):
    """Project directory backed by a dict.

    Usage:
        directory = InMemoryProjectDirectory.seeded()
        project = await directory.get_by_id("p1")
    """

    def __init__(self, projects: list[Project] | None = None) -> None:
        self._projects: dict[str, Project] = {p.id: p for p in projects or []}

    @classmethod
    def seeded(cls) -> "InMemoryProjectDirectory":
        """Create a directory pre-populated with the sample catalogue."""
        return cls(seed_projects())

    def add(self, project: Project) -> None:
        self._projects[project.id] = project

    async def get_by_id(self, project_id: str) -> Project | None:
        return self._projects.get(project_id)

    async def list_all(self) -> list[Project]:
        return sorted(
            self._projects.values(),
            key=lambda p: p.last_updated_at,
            reverse=True,
        )


class PostgresProjectDirectory(ProjectDirectory):
    """Project directory reading the ``projects`` table.

    Ministry and state ids are resolved against the reference lists in
    seed_data; unknown ids fall back to a placeholder with the raw id.
    """

    def __init__(self, database: Database) -> None:
        self._db = database
        self._ministries = {m.id: m for m in MINISTRIES}
        self._states = {s.id: s for s in STATES}

    async def get_by_id(self, project_id: str) -> Project | None:
        row = await self._db.fetchrow(
            "SELECT * FROM projects WHERE id = $1",
            project_id,
        )
        if row is None:
            return None
        return self._row_to_project(row)

    async def list_all(self) -> list[Project]:
        rows = await self._db.fetch(
            "SELECT * FROM projects ORDER BY last_updated_at DESC"
        )
        return [self._row_to_project(row) for row in rows]

    def _row_to_project(self, row: Any) -> Project:
        ministry_id = row.get("ministry_id") or ""
        state_id = row.get("state_id") or ""
        return Project(
            id=row["id"],
            title=row["title"],
            subtitle=row.get("subtitle") or "",
            ministry=self._ministries.get(ministry_id, Ministry(ministry_id, "Unknown Ministry")),
            state=self._states.get(state_id, State(state_id, "Unknown State")),
            status=row["status"],
            description=row.get("description") or "",
            start_date=row["start_date"],
            expected_end_date=row.get("expected_end_date"),
            budget=float(row["budget"]) if row.get("budget") is not None else None,
            expenditure=(
                float(row["expenditure"]) if row.get("expenditure") is not None else None
            ),
            tags=list(row.get("tags") or []),
            last_updated_at=row["last_updated_at"],
        )
