"""Cooldown-based suppression of repeated alerts."""

from __future__ import annotations

import threading
import time

_DEFAULT_COOLDOWN = 60.0


class Throttle:
    """Lets one alert per key through per ``cooldown`` seconds (default 60)."""

    def __init__(self, cooldown: float = _DEFAULT_COOLDOWN) -> None:
        self._cooldown = cooldown if cooldown > 0 else _DEFAULT_COOLDOWN
        self._last: dict[str, float] = {}
        self._lock = threading.Lock()

    @property
    def cooldown(self) -> float:
        return self._cooldown

    def allow(self, key: str) -> bool:
        """Return True and record the time if ``key`` is outside its cooldown."""
        with self._lock:
            now = time.monotonic()
            last = self._last.get(key)
            if last is not None and now - last < self._cooldown:
                return False
            self._last[key] = now
            return True

    def reset(self, key: str) -> None:
        """Let the next alert for ``key`` through immediately."""
        with self._lock:
            self._last.pop(key, None)

    def reset_all(self) -> None:
        """Clear the state of every key."""
        with self._lock:
            self._last.clear()