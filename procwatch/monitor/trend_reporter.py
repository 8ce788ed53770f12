"""Periodic logging of CPU and memory trends."""

from __future__ import annotations

import threading
from typing import Sequence

from procwatch.logger import Logger
from procwatch.monitor.history import History
from procwatch.monitor.reporter import _Flag, _ticks
from procwatch.monitor.trend import TrendAnalyzer

_DEFAULT_INTERVAL = 30.0


class TrendReporter:
    """Logs trends of the named processes every ``interval`` seconds (default 30)."""

    def __init__(
        self,
        history: History,
        analyzer: TrendAnalyzer,
        log: Logger,
        interval: float,
        processes: Sequence[str],
    ) -> None:
        self.history = history
        self.analyzer = analyzer
        self.log = log
        self.interval = float(interval) if interval > 0 else _DEFAULT_INTERVAL
        self.processes = list(processes)
        self._stop = threading.Event()

    def run(self, cancel: _Flag | None = None) -> None:
        """Report until ``cancel`` is set or stop() is called; blocks."""
        for _ in _ticks(self.interval, self._stop, cancel):
            self.report()

    def stop(self) -> None:
        """Halt the reporting loop; safe to call more than once."""
        self._stop.set()

    def report(self) -> None:
        """Log the trend of each process that has at least two samples."""
        for proc in self.processes:
            samples = self.history.all(proc)
            if len(samples) < 2:
                continue
            cpu = self.analyzer.analyze(proc, "cpu", [s.cpu_percent for s in samples])
            mem = self.analyzer.analyze(proc, "mem", [s.memory_mb for s in samples])
            self.log.info(
                "trend",
                {
                    "process": proc,
                    "cpu_slope": cpu.slope,
                    "cpu_direction": cpu.direction.value,
                    "mem_slope": mem.slope,
                    "mem_direction": mem.direction.value,
                },
            )