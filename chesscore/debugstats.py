"""Run-time statistics collectors used while debugging the engine.

Each collector has a fixed number of numbered slots.  Values are gathered
with the ``*_of`` / ``hit_on`` methods and summarised with :meth:`DebugStats.report`.
"""

from __future__ import annotations

import math
import threading
from dataclasses import dataclass

MAX_DEBUG_SLOTS = 32

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


def _fmt(x: float) -> str:
    """Format a float with six significant digits, like a default ostream."""
    return f"{x:g}"


def _sqrt(x: float) -> float:
    return math.sqrt(x) if x >= 0 else math.nan


def _divide(num: float, den: float) -> float:
    if den == 0:
        if num == 0 or math.isnan(num):
            return math.nan
        return math.copysign(math.inf, num)
    return num / den


@dataclass
class _Hit:
    total: int = 0
    hits: int = 0


@dataclass
class _Mean:
    total: int = 0
    sum: int = 0


@dataclass
class _Stdev:
    total: int = 0
    sum: int = 0
    sum_sq: int = 0


@dataclass
class _Extremes:
    total: int = 0
    max: int = _INT64_MIN
    min: int = _INT64_MAX


@dataclass
class _Correl:
    total: int = 0
    sum1: int = 0
    sum1_sq: int = 0
    sum2: int = 0
    sum2_sq: int = 0
    sum12: int = 0


class DebugStats:
    """Thread-safe collection of hit rates, means, deviations and correlations."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._reset()

    def _reset(self) -> None:
        self._hit = [_Hit() for _ in range(MAX_DEBUG_SLOTS)]
        self._mean = [_Mean() for _ in range(MAX_DEBUG_SLOTS)]
        self._stdev = [_Stdev() for _ in range(MAX_DEBUG_SLOTS)]
        self._extremes = [_Extremes() for _ in range(MAX_DEBUG_SLOTS)]
        self._correl = [_Correl() for _ in range(MAX_DEBUG_SLOTS)]

    @staticmethod
    def _check_slot(slot: int) -> int:
        if not 0 <= slot < MAX_DEBUG_SLOTS:
            raise IndexError(f"debug slot out of range: {slot}")
        return slot

    def hit_on(self, cond: bool, slot: int = 0) -> None:
        """Count one event in ``slot``, and one hit if ``cond`` holds."""
        entry = self._hit[self._check_slot(slot)]
        with self._lock:
            entry.total += 1
            if cond:
                entry.hits += 1

    def mean_of(self, value: int, slot: int = 0) -> None:
        """Add ``value`` to the running mean of ``slot``."""
        entry = self._mean[self._check_slot(slot)]
        with self._lock:
            entry.total += 1
            entry.sum += value

    def stdev_of(self, value: int, slot: int = 0) -> None:
        """Add ``value`` to the standard deviation sample of ``slot``."""
        entry = self._stdev[self._check_slot(slot)]
        with self._lock:
            entry.total += 1
            entry.sum += value
            entry.sum_sq += value * value

    def extremes_of(self, value: int, slot: int = 0) -> None:
        """Track the minimum and maximum of the values seen in ``slot``."""
        entry = self._extremes[self._check_slot(slot)]
        with self._lock:
            entry.total += 1
            entry.max = max(entry.max, value)
            entry.min = min(entry.min, value)

    def correl_of(self, value1: int, value2: int, slot: int = 0) -> None:
        """Add a pair to the correlation sample of ``slot``."""
        entry = self._correl[self._check_slot(slot)]
        with self._lock:
            entry.total += 1
            entry.sum1 += value1
            entry.sum1_sq += value1 * value1
            entry.sum2 += value2
            entry.sum2_sq += value2 * value2
            entry.sum12 += value1 * value2

    def report(self) -> str:
        """Return one line per used slot, grouped by kind of statistic."""
        lines: list[str] = []
        with self._lock:
            for i, h in enumerate(self._hit):
                if n := h.total:
                    lines.append(
                        f"Hit #{i}: Total {n} Hits {h.hits}"
                        f" Hit Rate (%) {_fmt(100.0 * (h.hits / n))}"
                    )
            for i, m in enumerate(self._mean):
                if n := m.total:
                    lines.append(f"Mean #{i}: Total {n} Mean {_fmt(m.sum / n)}")
            for i, s in enumerate(self._stdev):
                if n := s.total:
                    r = _sqrt(s.sum_sq / n - (s.sum / n) ** 2)
                    lines.append(f"Stdev #{i}: Total {n} Stdev {_fmt(r)}")
            for i, e in enumerate(self._extremes):
                if n := e.total:
                    lines.append(f"Extremity #{i}: Total {n} Min {e.min} Max {e.max}")
            for i, c in enumerate(self._correl):
                if n := c.total:
                    e1, e2 = c.sum1 / n, c.sum2 / n
                    num = c.sum12 / n - e1 * e2
                    den = _sqrt(c.sum1_sq / n - e1 * e1) * _sqrt(c.sum2_sq / n - e2 * e2)
                    r = _divide(num, den)
                    lines.append(f"Correl. #{i}: Total {n} Coefficient {_fmt(r)}")
        return "".join(line + "\n" for line in lines)

    def clear(self) -> None:
        """Forget every collected value."""
        with self._lock:
            self._reset()