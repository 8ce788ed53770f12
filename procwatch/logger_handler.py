"""Alert handler that writes events to the structured logger."""

from __future__ import annotations

from typing import Callable

from procwatch.alert import Event, Severity
from procwatch.logger import Logger


def logger_handler(log: Logger) -> Callable[[Event], None]:
    """Return a handler that logs events at a level matching their severity."""

    def handle(event: Event) -> None:
        fields = {
            "process": event.process,
            "pid": event.pid,
            "metric": event.metric,
            "value": event.value,
            "threshold": event.threshold,
            "severity": str(event.severity),
        }
        if event.severity == Severity.CRITICAL:
            log.error(event.message, fields)
        elif event.severity == Severity.WARN:
            log.warn(event.message, fields)
        else:
            log.alert(event.message, fields)

    return handle