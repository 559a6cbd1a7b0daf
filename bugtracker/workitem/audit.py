"""
Audit sink writing events through the structured JSON logger.

Each event becomes one log line with ``event`` set to the event key and
the populated fields merged in (see ``ComponentLogger.audit``).
"""

from bugtracker.logger import get_logger
from bugtracker.workitem.protocol import PopulateFields


class LoggingAuditLogger:
    """AuditLogger that emits events as structured log records."""

    def __init__(self, component: str = "AUDIT"):
        self._log = get_logger(component)

    async def log(self, event_key: str, populate: PopulateFields) -> None:
        fields: dict[str, str] = {}
        populate(fields)
        self._log.audit(event_key, fields)
