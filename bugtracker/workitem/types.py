"""
WorkItem types and data structures.

This module defines the data classes that flow from email intake through
project resolution to the Azure DevOps create request.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Mapping


class DetermineTargetProjectVia(Enum):
    """
    Which sources may decide the target project of a work item.

    The configured project is always the last fallback. See
    ``resolver.RESOLUTION_ORDER`` for the precedence of each selector.
    """
    SUBJECT = "subject"
    RECIPIENT = "recipient"
    ALL = "all"

    @classmethod
    def parse(cls, value: "str | DetermineTargetProjectVia") -> "DetermineTargetProjectVia":
        """Parse a selector name case-insensitively ("Subject", "ALL", ...)."""
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


@dataclass(frozen=True)
class WorkItem:
    """
    A bug report as received from the mail intake.

    Frozen so the processor can never alter what it was handed.

    Attributes:
        title: Email subject line
        content: Email body, submitted as the bug description
        metadata: Optional string fields from the message (e.g. "recipient")
    """
    title: str
    content: str = ""
    metadata: Mapping[str, str] | None = None

    def get_metadata(self, key: str) -> str | None:
        """Look up a metadata field, tolerating absent metadata."""
        if not self.metadata:
            return None
        return self.metadata.get(key)


@dataclass(frozen=True)
class ResolvedProject:
    """
    Outcome of project resolution.

    Attributes:
        project: Target project name (never empty)
        title: Title to submit; stripped of the project prefix when the
               project came from the subject line
        source: Which resolver produced the project
                ("recipient", "subject", "config")
    """
    project: str
    title: str
    source: str


@dataclass(frozen=True)
class HttpResponse:
    """Status and body text returned by an HttpTransport."""
    status: int
    body: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300
