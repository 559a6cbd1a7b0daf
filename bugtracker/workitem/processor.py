"""
Azure DevOps work item processor.

Turns one WorkItem into one "Bug" in Azure DevOps: resolve the target
project, POST the create request through the injected HttpTransport and,
when the tracker accepts it, record a "bug" audit event.
"""

from pathlib import Path

from bugtracker.logger import get_logger
from bugtracker.workitem.azure_devops import (
    create_work_item_body,
    create_work_item_uri,
    parse_created_work_item,
)
from bugtracker.workitem.config import WorkItemConfig, load_work_item_config
from bugtracker.workitem.errors import WorkItemSubmissionError
from bugtracker.workitem.protocol import AuditLogger, HttpTransport
from bugtracker.workitem.resolver import resolve_project
from bugtracker.workitem.types import ResolvedProject, WorkItem

AUDIT_EVENT = "bug"

log = get_logger("PROCESSOR")


class AzureDevOpsWorkItemProcessor:
    """
    Creates Azure DevOps bugs from work items.

    Holds no per-request state, so one instance may process many work
    items concurrently.

    Example:
        processor = AzureDevOpsWorkItemProcessor.from_config()
        await processor.process_work_item(WorkItem(title="proj | crash", content="..."))
    """

    def __init__(self, http: HttpTransport, config: WorkItemConfig, audit: AuditLogger):
        """
        Args:
            http: Transport used for the create request
            config: Target organization and project resolution settings
            audit: Sink for the "bug" audit event
        """
        self._http = http
        self._config = config
        self._audit = audit

    @classmethod
    def from_config(cls, config_path: str | Path | None = None) -> "AzureDevOpsWorkItemProcessor":
        """
        Create a processor with the default aiohttp transport and logging audit sink.

        Args:
            config_path: Optional path to config file

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        from bugtracker.workitem.audit import LoggingAuditLogger
        from bugtracker.workitem.transport import AiohttpTransport

        config = load_work_item_config(config_path)
        return cls(AiohttpTransport(timeout_s=config.timeout_s), config, LoggingAuditLogger())

    @property
    def config(self) -> WorkItemConfig:
        return self._config

    def resolve(self, item: WorkItem) -> ResolvedProject:
        """Resolve target project and title without submitting anything."""
        return resolve_project(item, self._config)

    async def process_work_item(self, item: WorkItem) -> ResolvedProject:
        """
        Submit one work item.

        Args:
            item: Work item to create

        Returns:
            The project and title the bug was created with

        Raises:
            ProjectResolutionError: If no target project could be determined
            WorkItemSubmissionError: If the tracker answered with a non-2xx status
        """
        resolved = self.resolve(item)
        uri = create_work_item_uri(self._config.organization, resolved.project)
        body = create_work_item_body(resolved.title, item.content)

        log.info(
            "Submitting work item",
            project=resolved.project,
            source=resolved.source,
            title=resolved.title,
        )

        response = await self._http.post(uri, body, self._config.personal_access_token)

        if not response.ok:
            log.error(
                "Work item creation failed",
                project=resolved.project,
                status=response.status,
            )
            raise WorkItemSubmissionError(response.status, response.body, uri=uri)

        created = parse_created_work_item(response.body)

        def populate(fields: dict[str, str]) -> None:
            fields["organization"] = self._config.organization
            fields["project"] = resolved.project
            fields["title"] = resolved.title
            fields["source"] = resolved.source
            fields.update(created)

        await self._audit.log(AUDIT_EVENT, populate)

        log.info(
            "Work item created",
            project=resolved.project,
            work_item_id=created.get("id"),
        )
        return resolved
