"""Least-squares and half-split trends over per-session series."""

from dataclasses import dataclass

import numpy as np

FLAT_SLOPE_TOLERANCE = 0.01
MIN_POINTS_FOR_TREND = 3


@dataclass(frozen=True)
class SeriesTrend:
    direction: str
    slope: float = 0.0


def compute_trend(values: list[float]) -> SeriesTrend:
    """Direction of a least-squares line through the series.

    Args:
        values: Per-session values, oldest first

    Returns:
        SeriesTrend with direction "up", "down", "flat", or "unknown" for short series
    """
    if len(values) < MIN_POINTS_FOR_TREND:
        return SeriesTrend("unknown")

    y = np.asarray(values, dtype=float)
    if np.allclose(y, y[0]):
        return SeriesTrend("flat")

    slope = float(np.polyfit(np.arange(y.size, dtype=float), y, 1)[0])
    if slope > FLAT_SLOPE_TOLERANCE:
        return SeriesTrend("up", slope)
    if slope < -FLAT_SLOPE_TOLERANCE:
        return SeriesTrend("down", slope)
    return SeriesTrend("flat", slope)


def half_split_change(values: list[float]) -> float:
    """Percentage change between the mean of the first and second half.

    The first half is the first ceil(n/2) values and the second half the last
    ceil(n/2), so for odd n the middle value counts in both.

    Returns:
        Percentage change, 0.0 for fewer than two values or a zero first-half mean
    """
    n = len(values)
    if n < 2:
        return 0.0

    half = (n + 1) // 2
    first = float(np.mean(values[:half]))
    second = float(np.mean(values[n // 2 :]))

    if first == 0:
        return 0.0
    return (second - first) / first * 100
