"""
Target project resolution.

A work item's project can come from the address the email was sent to,
from a prefix in the subject line, or from configuration. Which of these
are consulted, and in which order, is fixed per selector in
RESOLUTION_ORDER; the first resolver returning a result wins.
"""

import re
from email.utils import parseaddr
from typing import Callable

from bugtracker.workitem.config import WorkItemConfig
from bugtracker.workitem.errors import ProjectResolutionError
from bugtracker.workitem.types import (
    DetermineTargetProjectVia,
    ResolvedProject,
    WorkItem,
)

Resolver = Callable[[WorkItem, WorkItemConfig], "ResolvedProject | None"]

RECIPIENT_KEY = "recipient"

# Subject prefixes, most preferred first. A bare "PROJ - rest" must not
# swallow a bracketed token, hence the character class exclusions, and its
# dash needs whitespace on at least one side so "my-proj" stays whole.
SUBJECT_PATTERNS = [
    re.compile(r"^\s*(?P<project>[^|\[\]()]+?)\s*\|\s*(?P<title>\S.*?)\s*$"),
    re.compile(r"^\s*(?P<project>[^|\[\]()\s][^|\[\]()]*?)(?:\s+-\s*|\s*-\s+)(?P<title>\S.*?)\s*$"),
    re.compile(r"^\s*\[\s*(?P<project>[^\]]+?)\s*\]\s*-\s*(?P<title>\S.*?)\s*$"),
    re.compile(r"^\s*\(\s*(?P<project>[^)]+?)\s*\)\s*-\s*(?P<title>\S.*?)\s*$"),
]

TRAILING_SEPARATOR = re.compile(r"\s*[|-]+\s*$")


def from_recipient(item: WorkItem, config: WorkItemConfig) -> ResolvedProject | None:
    """Use the local part of metadata["recipient"] ("proj@example.com" -> "proj")."""
    recipient = item.get_metadata(RECIPIENT_KEY)
    if not recipient:
        return None

    _, address = parseaddr(recipient)
    local, sep, _ = address.partition("@")
    local = local.strip()
    if not sep or not local:
        return None

    return ResolvedProject(project=local, title=item.title, source="recipient")


def from_subject_prefix(item: WorkItem, config: WorkItemConfig) -> ResolvedProject | None:
    """Extract a leading project token from the title, e.g. "[proj] - title"."""
    for pattern in SUBJECT_PATTERNS:
        match = pattern.match(item.title or "")
        if match:
            return ResolvedProject(
                project=match.group("project").strip(),
                title=match.group("title"),
                source="subject",
            )
    return None


def from_whole_subject(item: WorkItem, config: WorkItemConfig) -> ResolvedProject | None:
    """Treat the entire title as the project name, leaving the title as is.

    A dangling separator with nothing after it ("proj |", "proj -") is not
    part of the name.
    """
    project = TRAILING_SEPARATOR.sub("", item.title or "").strip()
    if not project:
        return None
    return ResolvedProject(project=project, title=item.title, source="subject")


def from_config(item: WorkItem, config: WorkItemConfig) -> ResolvedProject | None:
    """Fall back to the configured project."""
    if not config.project:
        return None
    return ResolvedProject(project=config.project, title=item.title, source="config")


RESOLUTION_ORDER: dict[DetermineTargetProjectVia, tuple[Resolver, ...]] = {
    DetermineTargetProjectVia.ALL: (from_recipient, from_subject_prefix, from_config),
    DetermineTargetProjectVia.RECIPIENT: (from_recipient, from_config),
    DetermineTargetProjectVia.SUBJECT: (from_subject_prefix, from_whole_subject, from_config),
}


def resolve_project(item: WorkItem, config: WorkItemConfig) -> ResolvedProject:
    """
    Determine the target project and the title to submit.

    Args:
        item: Incoming work item
        config: Work item configuration (selects the resolvers to try)

    Returns:
        ResolvedProject from the first resolver that produced one

    Raises:
        ProjectResolutionError: If no resolver produced a project
    """
    for resolver in RESOLUTION_ORDER[config.determine_target_project_via]:
        resolved = resolver(item, config)
        if resolved is not None:
            return resolved

    raise ProjectResolutionError(
        f"Could not determine target project for '{item.title}' "
        f"(via={config.determine_target_project_via.value}, no project configured)"
    )
