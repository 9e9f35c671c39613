"""Small numeric helpers shared by the analyzers."""

import math


def clamp(value: float, lower: float = 0.0, upper: float = 100.0) -> float:
    """Clamp value into [lower, upper]."""
    return max(lower, min(upper, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties away from zero for positives (62.5 -> 63)."""
    return int(math.floor(value + 0.5))


def mean(values: list[float]) -> float:
    """Arithmetic mean, 0.0 for an empty list."""
    if not values:
        return 0.0
    return sum(values) / len(values)


def pct_change(before: float, after: float) -> float:
    """Percentage change from before to after; 0.0 when before is zero."""
    if before == 0:
        return 0.0
    return (after - before) / before * 100
