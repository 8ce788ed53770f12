"""Z-score anomaly detection against a rolling baseline."""

from __future__ import annotations

from dataclasses import dataclass

from procwatch.monitor.baseline import BaselineTracker

_DEFAULT_THRESHOLD = 2.0


def z_score(value: float, mean: float, stddev: float) -> float:
    """Standard score of ``value``; 0 when the deviation is zero."""
    if stddev == 0:
        return 0.0
    return (value - mean) / stddev


@dataclass(frozen=True)
class AnomalyResult:
    """Outcome of an anomaly check for one process."""

    process_name: str
    cpu_anomaly: bool
    mem_anomaly: bool
    cpu_z_score: float
    mem_z_score: float

    def __str__(self) -> str:
        return (
            f"process={self.process_name} cpu_anomaly={str(self.cpu_anomaly).lower()} "
            f"cpu_z={self.cpu_z_score:.2f} mem_anomaly={str(self.mem_anomaly).lower()} "
            f"mem_z={self.mem_z_score:.2f}"
        )


class AnomalyDetector:
    """Flags values whose z-score against the baseline exceeds a threshold.

    ``window`` is the baseline window in seconds.
    """

    def __init__(self, z_threshold: float = _DEFAULT_THRESHOLD, window: float = 0) -> None:
        self._threshold = z_threshold if z_threshold > 0 else _DEFAULT_THRESHOLD
        self._baseline = BaselineTracker(window)

    @property
    def threshold(self) -> float:
        return self._threshold

    def add(self, name: str, cpu: float, mem: float) -> None:
        """Record a sample for the baseline of ``name``."""
        self._baseline.add(name, cpu, mem)

    def analyze(self, name: str, cpu: float, mem: float) -> AnomalyResult | None:
        """Check the values against the baseline; None if there is no baseline yet."""
        stats = self._baseline.compute(name)
        if stats is None:
            return None
        cpu_z = z_score(cpu, stats.avg_cpu, stats.std_cpu)
        mem_z = z_score(mem, stats.avg_memory, stats.std_memory)
        return AnomalyResult(
            process_name=name,
            cpu_anomaly=abs(cpu_z) > self._threshold,
            mem_anomaly=abs(mem_z) > self._threshold,
            cpu_z_score=cpu_z,
            mem_z_score=mem_z,
        )