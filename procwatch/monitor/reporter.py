"""Periodic logging of aggregated process statistics."""

from __future__ import annotations

import threading
import time
from typing import Iterator, Protocol, Sequence

from procwatch.logger import Logger
from procwatch.monitor.aggregator import AggregationError, Aggregator

_POLL = 0.05


class _Flag(Protocol):
    def is_set(self) -> bool: ...


def _ticks(
    interval: float, stop: threading.Event, cancel: _Flag | None = None
) -> Iterator[None]:
    """Yield once per ``interval`` seconds until ``stop`` or ``cancel`` is set."""
    next_at = time.monotonic() + interval
    while True:
        while True:
            if stop.is_set() or (cancel is not None and cancel.is_set()):
                return
            remaining = next_at - time.monotonic()
            if remaining <= 0:
                break
            stop.wait(remaining if cancel is None else min(remaining, _POLL))
        yield
        next_at += interval
        now = time.monotonic()
        if next_at <= now:
            next_at = now + interval


def _check_interval(interval: float) -> float:
    if interval <= 0:
        raise ValueError(f"interval must be positive, got {interval!r}")
    return float(interval)


class Reporter:
    """Logs aggregated stats for the named processes every ``interval`` seconds."""

    def __init__(
        self,
        aggregator: Aggregator,
        log: Logger,
        names: Sequence[str],
        interval: float,
    ) -> None:
        self.aggregator = aggregator
        self.log = log
        self.names = list(names)
        self.interval = _check_interval(interval)
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        """Begin reporting in a background thread."""
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._run, name="procwatch-reporter", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop the reporting thread and wait for it to exit."""
        self._stop.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join()

    def _run(self) -> None:
        for _ in _ticks(self.interval, self._stop):
            self.report()

    def report(self) -> None:
        """Log one round of statistics for every configured process."""
        for name in self.names:
            try:
                stats = self.aggregator.compute(name)
            except AggregationError as exc:
                self.log.warn("aggregation skipped", {"process": name, "error": str(exc)})
                continue
            self.log.info(
                "process stats",
                {
                    "process": stats.process_name,
                    "pid": stats.pid,
                    "avg_cpu": stats.avg_cpu,
                    "max_cpu": stats.max_cpu,
                    "avg_mem_mb": stats.avg_mem,
                    "max_mem_mb": stats.max_mem,
                    "sample_count": stats.sample_count,
                    "window": stats.window,
                },
            )