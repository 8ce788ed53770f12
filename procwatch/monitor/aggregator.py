"""Rolling statistics computed from a History."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from procwatch.monitor.history import History


class AggregationError(LookupError):
    """Raised when there are no samples to aggregate."""


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Stats:
    """Aggregated statistics for one process; memory values are in MB."""

    process_name: str
    pid: int = 0
    avg_cpu: float = 0.0
    max_cpu: float = 0.0
    avg_mem: float = 0.0
    max_mem: float = 0.0
    sample_count: int = 0
    window: int = 0
    computed_at: datetime = field(default_factory=_now)

    def __str__(self) -> str:
        return (
            f"process={self.process_name} pid={self.pid} samples={self.sample_count} "
            f"avg_cpu={self.avg_cpu:.2f}% max_cpu={self.max_cpu:.2f}% "
            f"avg_mem={self.avg_mem:.2f}MB max_mem={self.max_mem:.2f}MB"
        )


class Aggregator:
    """Computes statistics over the samples retained by a History."""

    def __init__(self, history: History) -> None:
        self.history = history

    def compute(self, name: str) -> Stats:
        """Return statistics for ``name``; raise AggregationError if there are no samples."""
        samples = self.history.all(name)
        if not samples:
            raise AggregationError(f'aggregator: no samples for process "{name}"')
        count = len(samples)
        cpus = [s.cpu_percent for s in samples]
        mems = [s.memory_mb for s in samples]
        return Stats(
            process_name=name,
            pid=samples[-1].pid,
            avg_cpu=sum(cpus) / count,
            max_cpu=max(0.0, *cpus),
            avg_mem=sum(mems) / count,
            max_mem=max(0.0, *mems),
            sample_count=count,
            window=self.history.window_size,
        )