"""Published government projects that citizens can leave feedback on.

Components:
- Project / Ministry / State: Dataclasses for project data
- ProjectDirectory: Read-only lookup ABC
- InMemoryProjectDirectory / PostgresProjectDirectory: Implementations
"""

from govhub.projects.directory import (
    InMemoryProjectDirectory,
    PostgresProjectDirectory,
    ProjectDirectory,
)
from govhub.projects.schemas import VALID_PROJECT_STATUSES, Ministry, Project, State

__all__ = [
    "InMemoryProjectDirectory",
    "Ministry",
    "PostgresProjectDirectory",
    "Project",
    "ProjectDirectory",
    "State",
    "VALID_PROJECT_STATUSES",
]
