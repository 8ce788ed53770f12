"""Periodic logging of per-process baselines."""

from __future__ import annotations

import threading
from typing import Sequence

from procwatch.logger import Logger
from procwatch.monitor.baseline import BaselineTracker
from procwatch.monitor.reporter import _ticks

_DEFAULT_INTERVAL = 300.0


class BaselineReporter:
    """Logs baseline stats of the named processes every ``interval`` seconds (default 300)."""

    def __init__(
        self,
        tracker: BaselineTracker,
        log: Logger,
        processes: Sequence[str],
        interval: float = _DEFAULT_INTERVAL,
    ) -> None:
        self.tracker = tracker
        self.log = log
        self.processes = list(processes)
        self.interval = float(interval) if interval > 0 else _DEFAULT_INTERVAL
        self._stop = threading.Event()
        self._done = threading.Event()
        self._started = False

    def run(self) -> None:
        """Report until stop() is called; blocks the calling thread."""
        self._started = True
        try:
            for _ in _ticks(self.interval, self._stop):
                self.emit()
        finally:
            self._done.set()

    def stop(self) -> None:
        """Signal the loop to end and wait for a running loop to finish."""
        self._stop.set()
        if self._started:
            self._done.wait()

    def emit(self) -> None:
        """Log the current baseline of every configured process."""
        for name in self.processes:
            stats = self.tracker.compute(name)
            if stats is None:
                self.log.warn("baseline: no samples yet", {"process": name})
                continue
            self.log.info(
                "baseline_stats",
                {
                    "process": name,
                    "avg_cpu": stats.avg_cpu,
                    "avg_mem_mb": stats.avg_memory / 1024 / 1024,
                    "samples": stats.samples,
                },
            )