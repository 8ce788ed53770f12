"""Liveness and restart tracking for monitored processes."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from datetime import datetime, timezone

_DEFAULT_STALENESS = 30.0


@dataclass(frozen=True)
class HealthStatus:
    """Current health of a monitored process."""

    pid: int
    name: str
    alive: bool
    last_seen: datetime
    restarts: int = 0


@dataclass
class _Record:
    pid: int
    name: str
    alive: bool
    last_seen: datetime
    seen_at: float
    restarts: int = 0


class HealthChecker:
    """Tracks liveness; a process unseen for ``staleness`` seconds is not alive."""

    def __init__(self, staleness: float = _DEFAULT_STALENESS) -> None:
        self._staleness = staleness if staleness > 0 else _DEFAULT_STALENESS
        self._records: dict[str, _Record] = {}
        self._lock = threading.Lock()

    @property
    def staleness(self) -> float:
        return self._staleness

    def update(self, name: str, pid: int) -> None:
        """Record that ``name`` was seen with ``pid``; a new positive PID counts a restart."""
        now = datetime.now(timezone.utc)
        mono = time.monotonic()
        with self._lock:
            record = self._records.get(name)
            if record is None:
                self._records[name] = _Record(
                    pid=pid, name=name, alive=True, last_seen=now, seen_at=mono
                )
                return
            if record.pid != pid and pid > 0:
                record.restarts += 1
            record.pid = pid
            record.alive = pid > 0
            record.last_seen = now
            record.seen_at = mono

    def _status(self, record: _Record, now: float) -> HealthStatus:
        stale = now - record.seen_at > self._staleness
        return HealthStatus(
            pid=record.pid,
            name=record.name,
            alive=record.alive and not stale,
            last_seen=record.last_seen,
            restarts=record.restarts,
        )

    def get(self, name: str) -> HealthStatus | None:
        """Return the status of ``name``, or None if it was never seen."""
        with self._lock:
            record = self._records.get(name)
            if record is None:
                return None
            return self._status(record, time.monotonic())

    def all(self) -> list[HealthStatus]:
        """Return a snapshot of every tracked status."""
        with self._lock:
            now = time.monotonic()
            return [self._status(r, now) for r in self._records.values()]