"""Structured JSON line logger."""

from __future__ import annotations

import json
import sys
import threading
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping, TextIO


class Level(str, Enum):
    """Severity of a log entry."""

    INFO = "INFO"
    WARN = "WARN"
    ALERT = "ALERT"
    ERROR = "ERROR"

    def __str__(self) -> str:
        return self.value


def _timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class Logger:
    """Writes one JSON object per line to a text stream (stdout by default)."""

    def __init__(self, out: TextIO | None = None) -> None:
        self._out = out if out is not None else sys.stdout
        self._lock = threading.Lock()

    @property
    def out(self) -> TextIO:
        return self._out

    def _log(self, level: Level, msg: str, fields: Mapping[str, Any] | None) -> None:
        entry: dict[str, Any] = {
            "timestamp": _timestamp(),
            "level": level.value,
            "message": msg,
        }
        if fields:
            entry["fields"] = dict(fields)
        try:
            line = json.dumps(entry, allow_nan=False)
        except (TypeError, ValueError):
            return
        with self._lock:
            self._out.write(line + "\n")
            flush = getattr(self._out, "flush", None)
            if flush is not None:
                flush()

    def info(self, msg: str, fields: Mapping[str, Any] | None = None) -> None:
        """Log an informational entry."""
        self._log(Level.INFO, msg, fields)

    def warn(self, msg: str, fields: Mapping[str, Any] | None = None) -> None:
        """Log a warning entry."""
        self._log(Level.WARN, msg, fields)

    def alert(self, msg: str, fields: Mapping[str, Any] | None = None) -> None:
        """Log a threshold-breach entry."""
        self._log(Level.ALERT, msg, fields)

    def error(self, msg: str, fields: Mapping[str, Any] | None = None) -> None:
        """Log an error entry."""
        self._log(Level.ERROR, msg, fields)