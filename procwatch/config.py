"""Loading and validation of the JSON configuration file."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any


class ConfigError(Exception):
    """Raised when the configuration cannot be read, decoded or validated."""


@dataclass
class ProcessConfig:
    """Monitoring settings for a single process."""

    name: str = ""
    pid_file: str = ""
    cpu_threshold: float = 0.0
    mem_threshold: int = 0


@dataclass
class Config:
    """Top-level configuration."""

    poll_interval_seconds: int = 0
    log_level: str = ""
    log_format: str = ""
    processes: list[ProcessConfig] = field(default_factory=list)
    poll_interval: timedelta = timedelta(0)

    def _validate(self) -> None:
        if not self.processes:
            raise ConfigError("invalid config: at least one process must be configured")
        for i, proc in enumerate(self.processes):
            if not proc.name:
                raise ConfigError(f"invalid config: process[{i}]: name is required")
            if not 0 <= proc.cpu_threshold <= 100:
                raise ConfigError(
                    f'invalid config: process "{proc.name}": '
                    "cpu_threshold_percent must be 0-100"
                )

    def _apply_defaults(self) -> None:
        if self.poll_interval_seconds <= 0:
            self.poll_interval_seconds = 5
        self.poll_interval = timedelta(seconds=self.poll_interval_seconds)
        if not self.log_format:
            self.log_format = "json"
        if not self.log_level:
            self.log_level = "info"


def _get(obj: dict[str, Any], key: str, types: tuple[type, ...], default: Any, where: str) -> Any:
    value = obj.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, types):
        raise ConfigError(f"decoding config: {where}{key}: unexpected value {value!r}")
    return value


def _parse_process(raw: Any, index: int) -> ProcessConfig:
    if not isinstance(raw, dict):
        raise ConfigError(f"decoding config: processes[{index}]: expected an object")
    where = f"processes[{index}]."
    mem = _get(raw, "mem_threshold_mb", (int,), 0, where)
    if mem < 0:
        raise ConfigError(f"decoding config: {where}mem_threshold_mb: must not be negative")
    return ProcessConfig(
        name=_get(raw, "name", (str,), "", where),
        pid_file=_get(raw, "pid_file", (str,), "", where),
        cpu_threshold=float(_get(raw, "cpu_threshold_percent", (int, float), 0.0, where)),
        mem_threshold=mem,
    )


def _parse(raw: Any) -> Config:
    if not isinstance(raw, dict):
        raise ConfigError("decoding config: expected a JSON object")
    processes = raw.get("processes")
    if processes is None:
        processes = []
    if not isinstance(processes, list):
        raise ConfigError("decoding config: processes: expected an array")
    return Config(
        poll_interval_seconds=_get(raw, "poll_interval_seconds", (int,), 0, ""),
        log_level=_get(raw, "log_level", (str,), "", ""),
        log_format=_get(raw, "log_format", (str,), "", ""),
        processes=[_parse_process(p, i) for i, p in enumerate(processes)],
    )


def load(path: str) -> Config:
    """Read, validate and complete the configuration stored at ``path``."""
    try:
        with open(path, encoding="utf-8") as fh:
            try:
                raw = json.load(fh)
            except (json.JSONDecodeError, UnicodeDecodeError) as exc:
                raise ConfigError(f"decoding config: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"opening config: {exc}") from exc
    cfg = _parse(raw)
    cfg._validate()
    cfg._apply_defaults()
    return cfg