"""Time-windowed baselines of per-process CPU and memory usage."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from statistics import fmean, pstdev

_DEFAULT_WINDOW = 600.0


@dataclass(frozen=True)
class BaselineSample:
    """A single CPU/memory observation; ``at`` is a monotonic timestamp."""

    cpu: float
    memory: float
    at: float


@dataclass(frozen=True)
class BaselineStats:
    """Baseline averages and population standard deviations for a process."""

    avg_cpu: float
    avg_memory: float
    samples: int
    std_cpu: float = 0.0
    std_memory: float = 0.0

    def __str__(self) -> str:
        return (
            f"baseline: avg_cpu={self.avg_cpu:.2f}% "
            f"avg_mem={self.avg_memory / 1024 / 1024:.2f}MB samples={self.samples}"
        )


class BaselineTracker:
    """Keeps samples per process for ``window`` seconds (default 600)."""

    def __init__(self, window: float = _DEFAULT_WINDOW) -> None:
        self._window = window if window > 0 else _DEFAULT_WINDOW
        self._samples: dict[str, list[BaselineSample]] = {}
        self._lock = threading.Lock()

    @property
    def window(self) -> float:
        return self._window

    def add(self, name: str, cpu: float, memory: float) -> None:
        """Record a sample, evicting those that have left the window."""
        now = time.monotonic()
        cutoff = now - self._window
        with self._lock:
            kept = [s for s in self._samples.get(name, ()) if s.at > cutoff]
            kept.append(BaselineSample(cpu=cpu, memory=memory, at=now))
            self._samples[name] = kept

    def compute(self, name: str) -> BaselineStats | None:
        """Return the baseline for ``name``, or None if there are no samples."""
        with self._lock:
            samples = list(self._samples.get(name, ()))
        if not samples:
            return None
        cpus = [s.cpu for s in samples]
        mems = [s.memory for s in samples]
        return BaselineStats(
            avg_cpu=fmean(cpus),
            avg_memory=fmean(mems),
            samples=len(samples),
            std_cpu=pstdev(cpus),
            std_memory=pstdev(mems),
        )

    def reset(self, name: str) -> None:
        """Forget all samples for ``name``."""
        with self._lock:
            self._samples.pop(name, None)