"""Per-process token buckets that limit alert bursts."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass

_DEFAULT_BURST = 3
_DEFAULT_WINDOW = 60.0


@dataclass
class _Bucket:
    tokens: int
    window_end: float


class RateLimit:
    """Allows up to ``max_burst`` alerts per process within ``window`` seconds."""

    def __init__(self, max_burst: int = _DEFAULT_BURST, window: float = _DEFAULT_WINDOW) -> None:
        self._max_burst = max_burst if max_burst > 0 else _DEFAULT_BURST
        self._window = window if window > 0 else _DEFAULT_WINDOW
        self._buckets: dict[str, _Bucket] = {}
        self._lock = threading.Lock()

    @property
    def max_burst(self) -> int:
        return self._max_burst

    @property
    def window(self) -> float:
        return self._window

    def allow(self, process: str) -> bool:
        """Consume a token for ``process``; False once the window's tokens are spent."""
        with self._lock:
            now = time.monotonic()
            bucket = self._buckets.get(process)
            if bucket is None or now > bucket.window_end:
                self._buckets[process] = _Bucket(self._max_burst - 1, now + self._window)
                return True
            if bucket.tokens <= 0:
                return False
            bucket.tokens -= 1
            return True

    def remaining(self, process: str) -> int:
        """Number of tokens left for ``process`` in the current window."""
        with self._lock:
            bucket = self._buckets.get(process)
            if bucket is None or time.monotonic() > bucket.window_end:
                return self._max_burst
            return bucket.tokens

    def reset(self, process: str) -> None:
        """Restore full capacity for ``process``."""
        with self._lock:
            self._buckets.pop(process, None)