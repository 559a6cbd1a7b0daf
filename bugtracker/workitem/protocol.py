"""
Collaborator Protocols for the work item processor.

The processor never talks to the network or to an audit sink directly;
it is handed objects satisfying these Protocols. Uses Python's Protocol
for structural typing - implementations (and test doubles) don't need
to inherit from these classes.
"""

from typing import Callable, Protocol, runtime_checkable

from bugtracker.workitem.types import HttpResponse


# Callback the audit sink invokes to let the caller fill in event fields
PopulateFields = Callable[[dict[str, str]], None]


@runtime_checkable
class HttpTransport(Protocol):
    """
    Authenticated HTTP POST capability.

    Implementations include:
    - AiohttpTransport (default, see bugtracker.workitem.transport)
    - AsyncMock doubles in the test suite

    Timeouts and cancellation are the transport's responsibility.
    """

    async def post(self, uri: str, json_body: str, auth_token: str) -> HttpResponse:
        """
        POST a JSON document.

        Args:
            uri: Absolute request URI
            json_body: Serialized request body
            auth_token: Credential for the target service

        Returns:
            HttpResponse with status code and body text

        Raises:
            Transport-specific exceptions for connection-level failures
        """
        ...


@runtime_checkable
class AuditLogger(Protocol):
    """
    Keyed audit event sink.

    Implementations include:
    - LoggingAuditLogger (structured JSON log, see bugtracker.workitem.audit)
    """

    async def log(self, event_key: str, populate: PopulateFields) -> None:
        """
        Record one audit event.

        Args:
            event_key: Event name (e.g. "bug")
            populate: Called with a fresh dict for the caller to fill in
        """
        ...
