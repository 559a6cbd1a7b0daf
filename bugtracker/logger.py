"""
Structured Logging for the bug tracker.
Outputs JSON-formatted logs for machine readability and audit trails.
"""

import json
import sys
import logging
from datetime import datetime, timezone

LOGGER_NAME = "BugTracker"

logger = logging.getLogger(LOGGER_NAME)
logger.setLevel(logging.INFO)
handler = logging.StreamHandler(sys.stdout)
logger.addHandler(handler)


class JsonFormatter(logging.Formatter):
    """JSON formatter that lifts every extra field into the record."""

    STANDARD_ATTRS = {
        'name', 'msg', 'args', 'created', 'filename', 'funcName', 'levelname',
        'levelno', 'lineno', 'module', 'msecs', 'message', 'pathname', 'process',
        'processName', 'relativeCreated', 'thread', 'threadName', 'exc_info',
        'exc_text', 'stack_info', 'asctime', 'taskName'
    }

    def format(self, record):
        log_record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "module": record.module,
        }

        for key, value in record.__dict__.items():
            if key not in self.STANDARD_ATTRS and not key.startswith('_'):
                try:
                    json.dumps(value)
                    log_record[key] = value
                except (TypeError, ValueError):
                    # Exceptions and other non-serializable values
                    log_record[key] = str(value)

        return json.dumps(log_record)


handler.setFormatter(JsonFormatter())


def get_logger(component: str = "SYSTEM"):
    return ComponentLogger(component)


class ComponentLogger:
    def __init__(self, component):
        self.component = component
        self.logger = logging.getLogger(LOGGER_NAME)

    def _extra(self, project, fields):
        extra = {"component": self.component}
        if project: extra["project"] = project
        extra.update(fields)
        return extra

    def info(self, msg, project=None, **kwargs):
        self.logger.info(msg, extra=self._extra(project, kwargs))

    def error(self, msg, project=None, **kwargs):
        self.logger.error(msg, extra=self._extra(project, kwargs))

    def warning(self, msg, project=None, **kwargs):
        self.logger.warning(msg, extra=self._extra(project, kwargs))

    def audit(self, event, fields):
        """
        Record a keyed audit event as one INFO line.

        The line carries ``event`` plus every field. Field names that
        LogRecord or this logger already use are kept under an ``audit_``
        prefix (``name`` -> ``audit_name``).

        Args:
            event: Event key (e.g. "bug")
            fields: Event fields
        """
        extra = {"component": self.component, "event": event}
        for key, value in fields.items():
            if key in RESERVED_FIELDS or key.startswith('_') or hasattr(logging.LogRecord, key):
                key = f"audit_{key}"
            extra[key] = value
        self.logger.info(f"audit:{event}", extra=extra)


# Names an audit field may not take verbatim
RESERVED_FIELDS = JsonFormatter.STANDARD_ATTRS | {"component", "event"}
