"""
Structured logging for suspended list events.

Outputs one JSON object per state-changing event. Only rule changes,
rearrangements and conflicts are logged; pure reads and moves that were not
needed are not.

Logged events:
- rule.added
- rule.removed
- rules.cleared
- sequence.rearranged
- rule.conflict

Usage:
    from suspendlist.logger import OrderingLogger, configure_logging

    configure_logging("info", "json")
    events = OrderingLogger(list_name="render-layers")
    events.log_rule_added(before="background", after="hud")
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Any, Dict, Hashable, Optional

from suspendlist.errors import ConflictingRulesError

# Event logger; handlers are attached by configure_logging()
_events_logger = logging.getLogger("suspendlist.events")
_events_logger.setLevel(logging.INFO)
_events_logger.propagate = False
if not _events_logger.handlers:
    _events_logger.addHandler(logging.NullHandler())

logging.getLogger("suspendlist").addHandler(logging.NullHandler())

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """Render a log record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def configure_logging(
    level: str = "info",
    log_format: str = "text",
    stream: Optional[IO[str]] = None,
) -> None:
    """
    Attach handlers for the ``suspendlist`` loggers.

    Diagnostic records use ``log_format``; structured events are always one
    JSON line each. Calling this again replaces the previous handlers.

    Args:
        level: debug, info, warning or error
        log_format: json or text
        stream: Output stream (defaults to stderr)
    """
    target = stream if stream is not None else sys.stderr
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    package_logger = logging.getLogger("suspendlist")
    package_logger.handlers.clear()
    handler = logging.StreamHandler(target)
    if log_format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(numeric_level)

    _events_logger.handlers.clear()
    events_handler = logging.StreamHandler(target)
    events_handler.setFormatter(logging.Formatter("%(message)s"))
    _events_logger.addHandler(events_handler)
    _events_logger.setLevel(numeric_level)


class OrderingLogger:
    """
    Structured logger for suspended list events.

    Each log entry includes standard fields for filtering:
    - service and list name
    - event type and event-specific attributes
    """

    def __init__(
        self,
        list_name: str = "default",
        service_name: str = "suspendlist",
        extra_labels: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize event logger.

        Args:
            list_name: Name of the list the events belong to
            service_name: Service name for log attribution
            extra_labels: Additional labels for filtering
        """
        self.list_name = list_name
        self.service_name = service_name
        self.extra_labels = extra_labels or {}
        self._logger = _events_logger

    def _emit(self, event: str, level: str = "info", **extra_fields: Any) -> None:
        """
        Emit a structured log entry.

        Args:
            event: Event type (e.g., "rule.added")
            level: Log level (debug, info, warn)
            **extra_fields: Event-specific fields
        """
        entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "event": event,
            "service": self.service_name,
            "list": self.list_name,
        }
        entry.update(extra_fields)

        if self.extra_labels:
            entry["labels"] = self.extra_labels

        log_line = json.dumps(entry, default=str)

        if level == "warn":
            self._logger.warning(log_line)
        elif level == "debug":
            self._logger.debug(log_line)
        else:
            self._logger.info(log_line)

    def log_rule_added(self, before: Hashable, after: Hashable) -> None:
        """Log a new precedence rule."""
        self._emit(event="rule.added", before=before, after=after)

    def log_rule_removed(self, before: Hashable, after: Hashable) -> None:
        """Log removal of a precedence rule."""
        self._emit(event="rule.removed", before=before, after=after)

    def log_rules_cleared(self, key: Hashable) -> None:
        """Log removal of every rule naming ``key``."""
        self._emit(event="rules.cleared", key=key)

    def log_rearranged(
        self,
        before: Hashable,
        after: Hashable,
        moves: int,
        trigger: str = "rule",
    ) -> None:
        """
        Log a rearrangement caused by enforcing ``before < after``.

        Args:
            before: Predecessor key of the enforced rule
            after: Successor key of the enforced rule
            moves: Number of single-item moves performed
            trigger: What caused enforcement (rule or insert)
        """
        self._emit(
            event="sequence.rearranged",
            before=before,
            after=after,
            moves=moves,
            trigger=trigger,
        )

    def log_conflict(self, error: ConflictingRulesError, trigger: str = "rule") -> None:
        """Log a rule conflict."""
        self._emit(event="rule.conflict", level="warn", trigger=trigger, **error.to_event())
