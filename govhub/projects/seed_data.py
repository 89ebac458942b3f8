"""
Seed data for the in-memory project directory.

Ministries and states mirror the portal's reference lists; the projects
are a small sample used by local development, the CLI, and tests.
"""

from datetime import date, datetime, timezone

from govhub.projects.schemas import Ministry, Project, State

MINISTRIES: list[Ministry] = [
    Ministry("m1", "Federal Ministry of Works and Housing"),
    Ministry("m2", "Federal Ministry of Finance, Budget and National Planning"),
    Ministry("m3", "Federal Ministry of Education"),
    Ministry("m4", "Federal Ministry of Health"),
    Ministry("m5", "Federal Ministry of Agriculture and Rural Development"),
    Ministry("m6", "Federal Ministry of Communications and Digital Economy"),
    Ministry(
        "m7",
        "Federal Ministry of Humanitarian Affairs, Disaster Management and Social Development",
    ),
]

STATES: list[State] = [
    State("s1", "Lagos"),
    State("s2", "Kano"),
    State("s3", "Rivers"),
    State("s4", "Abuja (FCT)"),
    State("s5", "Oyo"),
    State("s6", "Kaduna"),
    State("s7", "Enugu"),
]

_MINISTRY = {m.id: m for m in MINISTRIES}
_STATE = {s.id: s for s in STATES}

_SEEDED_AT = datetime(2024, 5, 1, 9, 0, 0, tzinfo=timezone.utc)


def seed_projects() -> list[Project]:
    """Build fresh Project instances for the sample catalogue."""
    return [
        Project(
            id="p1",
            title="Lagos-Ibadan Expressway Reconstruction",
            subtitle="Rebuilding a vital economic corridor",
            ministry=_MINISTRY["m1"],
            state=_STATE["s1"],
            status="Ongoing",
            description=(
                "Full reconstruction and expansion of the 127.6km "
                "Lagos-Ibadan Expressway to six lanes."
            ),
            start_date=date(2013, 7, 1),
            expected_end_date=date(2025, 12, 31),
            budget=1_050_000_000_000,
            expenditure=780_000_000_000,
            tags=["infrastructure", "roads", "transport"],
            last_updated_at=_SEEDED_AT,
        ),
        Project(
            id="p2",
            title="Second Niger Bridge",
            subtitle="Linking Asaba and Onitsha",
            ministry=_MINISTRY["m1"],
            state=_STATE["s7"],
            status="Completed",
            description="A 1.6km bridge across the River Niger easing east-west traffic.",
            start_date=date(2018, 9, 1),
            expected_end_date=date(2023, 5, 23),
            budget=336_000_000_000,
            expenditure=336_000_000_000,
            tags=["infrastructure", "bridges"],
            last_updated_at=_SEEDED_AT,
        ),
        Project(
            id="p3",
            title="Primary Healthcare Revitalisation",
            subtitle="One functional clinic per ward",
            ministry=_MINISTRY["m4"],
            state=_STATE["s2"],
            status="Ongoing",
            description="Upgrading primary healthcare centres across Kano wards.",
            start_date=date(2021, 1, 15),
            budget=45_000_000_000,
            expenditure=12_500_000_000,
            tags=["health"],
            last_updated_at=_SEEDED_AT,
        ),
        Project(
            id="p4",
            title="National Broadband Rollout Phase II",
            subtitle="Fibre backbone to every state capital",
            ministry=_MINISTRY["m6"],
            state=_STATE["s4"],
            status="Planned",
            description="Extending the federal fibre backbone and metro rings.",
            start_date=date(2025, 3, 1),
            tags=["digital", "broadband"],
            last_updated_at=_SEEDED_AT,
        ),
    ]
