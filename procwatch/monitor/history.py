"""Rolling per-process store of resource samples."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from statistics import fmean

_DEFAULT_WINDOW = 60


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Sample:
    """A single resource usage snapshot for a process."""

    name: str
    cpu_percent: float = 0.0
    memory_mb: float = 0.0
    pid: int = 0
    timestamp: datetime = field(default_factory=_now)


class History:
    """Keeps at most ``window_size`` recent samples per process name."""

    def __init__(self, window_size: int = _DEFAULT_WINDOW) -> None:
        self._window = window_size if window_size > 0 else _DEFAULT_WINDOW
        self._samples: dict[str, deque[Sample]] = {}
        self._lock = threading.Lock()

    @property
    def window_size(self) -> int:
        return self._window

    def add(self, sample: Sample) -> None:
        """Append a sample, dropping the oldest one once the window is full."""
        with self._lock:
            buf = self._samples.get(sample.name)
            if buf is None:
                buf = self._samples[sample.name] = deque(maxlen=self._window)
            buf.append(sample)

    def latest(self, name: str) -> Sample | None:
        """Return the most recent sample for ``name``, or None."""
        with self._lock:
            buf = self._samples.get(name)
            return buf[-1] if buf else None

    def all(self, name: str) -> list[Sample]:
        """Return a copy of the retained samples for ``name``, oldest first."""
        with self._lock:
            return list(self._samples.get(name, ()))

    def average_cpu(self, name: str) -> float:
        """Mean CPU percent over retained samples; 0 when there are none."""
        samples = self.all(name)
        return fmean(s.cpu_percent for s in samples) if samples else 0.0

    def average_memory(self, name: str) -> float:
        """Mean memory (MB) over retained samples; 0 when there are none."""
        samples = self.all(name)
        return fmean(s.memory_mb for s in samples) if samples else 0.0