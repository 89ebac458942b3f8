"""Exceptions raised by feedback stores."""


class FeedbackError(Exception):
    """Base exception for feedback storage errors."""


class ProjectNotFoundError(FeedbackError):
    """Raised when a feedback operation targets an unknown project."""

    def __init__(self, project_id: str):
        super().__init__(f"Project {project_id!r} not found")
        self.project_id = project_id


class FeedbackNotFoundError(FeedbackError):
    """Raised when a feedback id is absent from its project's collection."""

    def __init__(self, project_id: str, feedback_id: str):
        super().__init__(
            f"Feedback {feedback_id!r} not found for project {project_id!r}"
        )
        self.project_id = project_id
        self.feedback_id = feedback_id
