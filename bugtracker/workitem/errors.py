"""Exceptions raised while turning an email into a work item."""


class BugTrackerError(Exception):
    """Base class for all bug tracker failures."""


class ConfigurationError(BugTrackerError, ValueError):
    """Configuration is missing or invalid."""


class ProjectResolutionError(ConfigurationError):
    """No configured source produced a target project for a work item."""


class WorkItemSubmissionError(BugTrackerError):
    """The tracker rejected the create request with a non-2xx status."""

    def __init__(self, status: int, body: str = "", uri: str | None = None):
        self.status = status
        self.body = body
        self.uri = uri
        super().__init__(f"Work item creation failed (HTTP {status}): {body[:200]}")
