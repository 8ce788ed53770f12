"""Alert events and their dispatch to handlers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Union


class Severity(str, Enum):
    """Level of an alert."""

    WARN = "warn"
    CRITICAL = "critical"

    def __str__(self) -> str:
        return self.value


@dataclass
class Event:
    """Details of a single threshold violation."""

    timestamp: datetime
    process: str
    pid: int = 0
    metric: str = ""
    value: float = 0.0
    threshold: float = 0.0
    severity: Union[Severity, str] = Severity.WARN
    message: str = ""


Handler = Callable[[Event], None]


class Manager:
    """Dispatches alert events to registered handlers."""

    def __init__(self) -> None:
        self._handlers: list[Handler] = []

    @property
    def handlers(self) -> tuple[Handler, ...]:
        return tuple(self._handlers)

    def register(self, handler: Handler) -> None:
        """Add a handler that will receive every emitted event."""
        self._handlers.append(handler)

    def emit(
        self,
        process: str,
        pid: int,
        metric: str,
        value: float,
        threshold: float,
        severity: Union[Severity, str],
    ) -> None:
        """Build an event and pass it to all registered handlers."""
        event = Event(
            timestamp=datetime.now(timezone.utc),
            process=process,
            pid=pid,
            metric=metric,
            value=value,
            threshold=threshold,
            severity=severity,
            message=f"{severity}: {metric} {value:.2f} exceeds threshold {threshold:.2f}",
        )
        for handler in self._handlers:
            handler(event)