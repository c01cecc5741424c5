"""Percentile ranking against sorted reference populations."""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from typing import Sequence


PCT_MIN = 0.02
PCT_MAX = 0.98
NEUTRAL_PCT = 0.5


def clamp(value: float, lo: float, hi: float) -> float:
    return min(hi, max(lo, value))


def fmt2(value: float) -> float:
    return round(value, 2)


def safe_div(numerator: float, denominator: float, fallback: float = 0.0) -> float:
    if denominator and denominator > 0:
        return numerator / denominator
    return fallback


def percentile_rank(sorted_values: Sequence[float] | None, value: float) -> float:
    """Return the mid-rank percentile of ``value`` in an ascending sequence.

    - Ties count as half a position: ``(below + equal * 0.5) / n``.
    - The result is clamped to [0.02, 0.98].
    - An empty population is neutral (0.5).
    """

    if not sorted_values:
        return NEUTRAL_PCT
    below = bisect_left(sorted_values, value)
    equal = bisect_right(sorted_values, value, lo=below) - below
    return clamp((below + equal * 0.5) / len(sorted_values), PCT_MIN, PCT_MAX)


def to_10(pct: float) -> float:
    """Convert a 0-1 percentile onto the public 0-10 scale."""

    return fmt2(clamp(pct * 10, 0.0, 10.0))


def shrink(pct: float, confidence: float) -> float:
    """Pull ``pct`` toward the neutral midpoint by ``1 - confidence``."""

    return pct * confidence + NEUTRAL_PCT * (1 - confidence)
