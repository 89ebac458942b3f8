"""Schema definitions for published government projects.

Projects are read-only from the feedback service's point of view: the
admin CRUD surface owns their lifecycle. Only the fields needed for
feedback lookup and listing are modelled here.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone

VALID_PROJECT_STATUSES: frozenset[str] = frozenset({
    "Ongoing",
    "Completed",
    "Planned",
    "On Hold",
})


@dataclass(frozen=True)
class Ministry:
    """A federal ministry responsible for projects."""

    id: str
    name: str


@dataclass(frozen=True)
class State:
    """A Nigerian state (or the FCT) where a project is located."""

    id: str
    name: str


@dataclass
class Project:
    """A published government project citizens can leave feedback on.

    Attributes:
        id: Project identifier (referenced by feedback records).
        title: Display title.
        subtitle: One-line summary shown under the title.
        ministry: Responsible ministry.
        state: State where the project is located.
        status: One of VALID_PROJECT_STATUSES.
        description: Long-form description.
        start_date: When work started (or is planned to start).
        expected_end_date: Planned completion, if known.
        budget: Approved budget in naira, if published.
        expenditure: Amount spent so far in naira, if published.
        tags: Free-form tags for filtering.
        last_updated_at: Last time the project page changed.
    """

    id: str
    title: str
    subtitle: str
    ministry: Ministry
    state: State
    status: str
    description: str
    start_date: date
    expected_end_date: date | None = None
    budget: float | None = None
    expenditure: float | None = None
    tags: list[str] = field(default_factory=list)
    last_updated_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    def __post_init__(self) -> None:
        if self.status not in VALID_PROJECT_STATUSES:
            raise ValueError(
                f"Invalid status {self.status!r}. "
                f"Must be one of: {sorted(VALID_PROJECT_STATUSES)}"
            )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "subtitle": self.subtitle,
            "ministry": {"id": self.ministry.id, "name": self.ministry.name},
            "state": {"id": self.state.id, "name": self.state.name},
            "status": self.status,
            "description": self.description,
            "startDate": self.start_date.isoformat(),
            "expectedEndDate": (
                self.expected_end_date.isoformat() if self.expected_end_date else None
            ),
            "budget": self.budget,
            "expenditure": self.expenditure,
            "tags": list(self.tags),
            "lastUpdatedAt": self.last_updated_at.isoformat(),
        }
