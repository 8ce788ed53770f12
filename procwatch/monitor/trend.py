"""Linear-regression trend detection over metric series."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

_DEFAULT_THRESHOLD = 0.5


class TrendDirection(str, Enum):
    """Whether a metric is rising, falling or stable."""

    RISING = "rising"
    FALLING = "falling"
    STABLE = "stable"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TrendResult:
    """Slope and direction of a metric series."""

    process: str
    metric: str
    slope: float
    direction: TrendDirection

    def __str__(self) -> str:
        return (
            f"process={self.process} metric={self.metric} "
            f"slope={self.slope:.4f} direction={self.direction.value}"
        )


def linear_slope(values: Sequence[float]) -> float:
    """Least-squares slope of equally spaced values; 0 for fewer than two."""
    n = len(values)
    if n < 2:
        return 0.0
    sum_x = 0.0
    sum_y = 0.0
    sum_xy = 0.0
    sum_x2 = 0.0
    for x, v in enumerate(values):
        sum_x += x
        sum_y += v
        sum_xy += x * v
        sum_x2 += x * x
    denom = n * sum_x2 - sum_x * sum_x
    if abs(denom) < 1e-9:
        return 0.0
    return (n * sum_xy - sum_x * sum_y) / denom


class TrendAnalyzer:
    """Classifies slopes whose magnitude exceeds ``threshold`` as rising or falling."""

    def __init__(self, threshold: float = _DEFAULT_THRESHOLD) -> None:
        self._threshold = threshold if threshold > 0 else _DEFAULT_THRESHOLD

    @property
    def threshold(self) -> float:
        return self._threshold

    def analyze(self, process: str, metric: str, values: Sequence[float]) -> TrendResult:
        """Compute the trend of ``values``, assumed equally spaced in time."""
        slope = linear_slope(values)
        if slope > self._threshold:
            direction = TrendDirection.RISING
        elif slope < -self._threshold:
            direction = TrendDirection.FALLING
        else:
            direction = TrendDirection.STABLE
        return TrendResult(process=process, metric=metric, slope=slope, direction=direction)