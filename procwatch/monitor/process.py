"""Process lookup and threshold checks."""

from __future__ import annotations

import os
from dataclasses import dataclass

from procwatch.config import Config, ProcessConfig


class ProcessNotFoundError(LookupError):
    """Raised when no running process has the requested name."""


@dataclass(frozen=True)
class ProcessStats:
    """Current resource usage of a monitored process."""

    pid: int
    name: str
    cpu_percent: float = 0.0
    memory_mb: float = 0.0


@dataclass(frozen=True)
class Alert:
    """A threshold violation; ``kind`` is "cpu" or "memory"."""

    process: str
    pid: int
    kind: str
    value: float
    limit: float


class Collector:
    """Gathers stats for the configured processes."""

    def __init__(self, cfg: Config) -> None:
        self.cfg = cfg


def find_pid(name: str, proc_root: str = "/proc") -> int:
    """Return the PID of the first process whose comm equals ``name``.

    Raises OSError if ``proc_root`` cannot be listed and
    ProcessNotFoundError if no process matches.
    """
    with os.scandir(proc_root) as it:
        entries = sorted(it, key=lambda e: e.name)
    for entry in entries:
        if not entry.name.isdigit() or not entry.is_dir():
            continue
        pid = int(entry.name)
        try:
            with open(os.path.join(entry.path, "comm"), encoding="utf-8", errors="replace") as fh:
                comm = fh.read().strip()
        except OSError:
            continue
        if comm == name:
            return pid
    raise ProcessNotFoundError(f'process "{name}" not found')


def check_alerts(stats: ProcessStats, proc: ProcessConfig) -> list[Alert]:
    """Return the alerts triggered by ``stats``; zero thresholds are ignored."""
    alerts = []
    if proc.cpu_threshold > 0 and stats.cpu_percent > proc.cpu_threshold:
        alerts.append(
            Alert(
                process=proc.name,
                pid=stats.pid,
                kind="cpu",
                value=stats.cpu_percent,
                limit=proc.cpu_threshold,
            )
        )
    if proc.mem_threshold > 0 and stats.memory_mb > proc.mem_threshold:
        alerts.append(
            Alert(
                process=proc.name,
                pid=stats.pid,
                kind="memory",
                value=stats.memory_mb,
                limit=proc.mem_threshold,
            )
        )
    return alerts