"""
WorkItem Package

Resolves the target project of an emailed bug report and creates it as
an Azure DevOps work item.
"""

from bugtracker.workitem.types import (
    DetermineTargetProjectVia,
    HttpResponse,
    ResolvedProject,
    WorkItem,
)
from bugtracker.workitem.errors import (
    BugTrackerError,
    ConfigurationError,
    ProjectResolutionError,
    WorkItemSubmissionError,
)
from bugtracker.workitem.protocol import AuditLogger, HttpTransport
from bugtracker.workitem.config import WorkItemConfig, load_work_item_config
from bugtracker.workitem.resolver import resolve_project
from bugtracker.workitem.processor import AzureDevOpsWorkItemProcessor

__all__ = [
    "DetermineTargetProjectVia",
    "HttpResponse",
    "ResolvedProject",
    "WorkItem",
    "BugTrackerError",
    "ConfigurationError",
    "ProjectResolutionError",
    "WorkItemSubmissionError",
    "AuditLogger",
    "HttpTransport",
    "WorkItemConfig",
    "load_work_item_config",
    "resolve_project",
    "AzureDevOpsWorkItemProcessor",
]
