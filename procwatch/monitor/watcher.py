"""Periodic collection and alerting for a single watched process."""

from __future__ import annotations

import threading

from procwatch.alert import Manager, Severity
from procwatch.config import ProcessConfig
from procwatch.logger import Logger
from procwatch.monitor.history import History, Sample
from procwatch.monitor.process import ProcessStats, check_alerts, find_pid
from procwatch.monitor.reporter import _check_interval, _Flag, _ticks
from procwatch.monitor.sampler import ProcSample, Sampler, SamplerError, cpu_percent
from procwatch.monitor.throttle import Throttle

_DEFAULT_TICKS_PER_SECOND = 100.0


class Watcher:
    """Samples one process every ``interval`` seconds, records it and emits alerts.

    If ``pid`` is not given it is looked up by name under the sampler's proc root,
    and looked up again whenever collection fails.
    """

    def __init__(
        self,
        cfg: ProcessConfig,
        sampler: Sampler,
        history: History,
        throttle: Throttle,
        alerts: Manager,
        log: Logger,
        interval: float,
        pid: int | None = None,
        ticks_per_second: float = _DEFAULT_TICKS_PER_SECOND,
    ) -> None:
        self.cfg = cfg
        self.sampler = sampler
        self.history = history
        self.throttle = throttle
        self.alerts = alerts
        self.log = log
        self.interval = _check_interval(interval)
        self.ticks_per_second = ticks_per_second
        self._pid = pid if pid is not None and pid > 0 else None
        self._prev: ProcSample | None = None
        self._stop = threading.Event()

    def run(self, cancel: _Flag | None = None) -> None:
        """Watch until ``cancel`` is set or stop() is called; blocks."""
        for _ in _ticks(self.interval, self._stop, cancel):
            self.tick()

    def stop(self) -> None:
        """Signal the watch loop to exit; safe to call more than once."""
        self._stop.set()

    def tick(self) -> None:
        """Collect one sample, record it and emit any unthrottled alerts."""
        name = self.cfg.name
        try:
            if self._pid is None:
                self._pid = find_pid(name, self.sampler.proc_root)
            current = self.sampler.collect(self._pid, name)
        except (OSError, LookupError, SamplerError) as exc:
            self._pid = None
            self._prev = None
            self.log.warn("collect_error", {"process": name, "error": str(exc)})
            return

        prev = self._prev
        cpu = (
            cpu_percent(prev, current, self.ticks_per_second)
            if prev is not None and prev.pid == current.pid
            else 0.0
        )
        self._prev = current

        self.history.add(
            Sample(
                name=name,
                cpu_percent=cpu,
                memory_mb=current.memory_mb,
                pid=current.pid,
                timestamp=current.timestamp,
            )
        )

        stats = ProcessStats(pid=current.pid, name=name, cpu_percent=cpu, memory_mb=current.memory_mb)
        for alert in check_alerts(stats, self.cfg):
            if self.throttle.allow(f"{alert.process}:{alert.kind}"):
                self.alerts.emit(
                    alert.process, alert.pid, alert.kind, alert.value, alert.limit, Severity.WARN
                )