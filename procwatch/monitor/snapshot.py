"""Bounded store of point-in-time views of all monitored processes."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime

_DEFAULT_CAPACITY = 10


@dataclass(frozen=True)
class SnapshotEntry:
    """Aggregated stats for one process at snapshot time; memory is in bytes."""

    name: str
    pid: int = 0
    avg_cpu: float = 0.0
    avg_memory: float = 0.0
    samples: int = 0

    def __str__(self) -> str:
        return (
            f"{self.name}(pid={self.pid}) cpu={self.avg_cpu:.2f}% "
            f"mem={self.avg_memory / 1024 / 1024:.2f}MB samples={self.samples}"
        )


@dataclass
class Snapshot:
    """A view of all monitored processes at one moment."""

    timestamp: datetime
    entries: dict[str, SnapshotEntry] = field(default_factory=dict)


class SnapshotStore:
    """Keeps the most recent ``capacity`` snapshots (default 10)."""

    def __init__(self, capacity: int = _DEFAULT_CAPACITY) -> None:
        self._capacity = capacity if capacity > 0 else _DEFAULT_CAPACITY
        self._buf: deque[Snapshot] = deque(maxlen=self._capacity)
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def add(self, snapshot: Snapshot) -> None:
        """Store a snapshot, evicting the oldest one when full."""
        with self._lock:
            self._buf.append(snapshot)

    def latest(self) -> Snapshot | None:
        """Return the most recently added snapshot, or None if empty."""
        with self._lock:
            return self._buf[-1] if self._buf else None

    def all(self) -> list[Snapshot]:
        """Return the stored snapshots, oldest first."""
        with self._lock:
            return list(self._buf)

    def __len__(self) -> int:
        with self._lock:
            return len(self._buf)