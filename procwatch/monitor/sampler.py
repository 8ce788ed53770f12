"""Reading raw CPU ticks and resident memory from a /proc tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

_PAGE_SIZE = 4096
_MB = 1024 * 1024


class SamplerError(Exception):
    """Raised when a process's stat file cannot be read or parsed."""


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ProcSample:
    """Raw usage of a process: cumulative CPU ticks and resident memory in MB."""

    pid: int
    name: str
    cpu_ticks: float = 0.0
    memory_mb: float = 0.0
    timestamp: datetime = field(default_factory=_now)


class Sampler:
    """Collects samples from ``proc_root`` (normally /proc)."""

    def __init__(self, proc_root: str = "/proc") -> None:
        self._proc_root = proc_root or "/proc"

    @property
    def proc_root(self) -> str:
        return self._proc_root

    def collect(self, pid: int, name: str) -> ProcSample:
        """Read utime+stime ticks and RSS for ``pid``; raise SamplerError on failure."""
        stat_path = Path(self._proc_root) / str(pid) / "stat"
        try:
            text = stat_path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise SamplerError(f"read stat for pid {pid}: {exc}") from exc

        fields = text.split()
        if len(fields) < 24:
            raise SamplerError(f"unexpected stat format for pid {pid}")

        try:
            utime = float(fields[13])
        except ValueError as exc:
            raise SamplerError(f"parse utime: {exc}") from exc
        try:
            stime = float(fields[14])
        except ValueError as exc:
            raise SamplerError(f"parse stime: {exc}") from exc
        try:
            rss = int(fields[23])
        except ValueError as exc:
            raise SamplerError(f"parse rss: {exc}") from exc

        return ProcSample(
            pid=pid,
            name=name,
            cpu_ticks=utime + stime,
            memory_mb=rss * float(_PAGE_SIZE) / _MB,
        )


def cpu_percent(prev: ProcSample, curr: ProcSample, ticks_per_second: float) -> float:
    """CPU usage of one core between two samples, 0 when no time has elapsed."""
    elapsed = (curr.timestamp - prev.timestamp).total_seconds()
    if elapsed <= 0:
        return 0.0
    delta = curr.cpu_ticks - prev.cpu_ticks
    return (delta / ticks_per_second) / elapsed * 100.0