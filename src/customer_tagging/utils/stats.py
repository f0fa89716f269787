"""
Numeric helpers for population thresholds and summary percentages.

The percentile used throughout is a descending rank: rank 1 is the maximum and
marks the 100th percentile, so the 90th percentile is the cut-off of the top 10%
and, for ten values, equals the largest one.
"""

import math
from datetime import datetime
from typing import Iterable

SECONDS_PER_DAY = 60 * 60 * 24


def top_percentile(values: Iterable[float], percentile: float) -> float:
    """Value at index ceil((100 - p) / 100 * N) - 1 of the descending sort, 0 if empty.

    The legacy dashboard indexed ceil(p / 100 * N) - 1 instead, so its thresholds
    sit near the bottom of the population and will not match these.
    """
    if not 0 <= percentile <= 100:
        raise ValueError(f"percentile must be between 0 and 100, got {percentile}")

    ranked = sorted(values, reverse=True)
    if not ranked:
        return 0
    index = math.ceil((100 - percentile) * len(ranked) / 100) - 1
    return ranked[max(0, index)]


def days_between(start: datetime, end: datetime) -> int:
    """Whole days between two instants, rounded up, order-independent."""
    return math.ceil(abs((end - start).total_seconds()) / SECONDS_PER_DAY)


def percentage(part: float, whole: float) -> float:
    """part/whole as a percentage rounded to 2 decimals; 0 when whole is 0."""
    if not whole:
        return 0.0
    return round(part / whole * 100, 2)


def mean(values: Iterable[float]) -> float:
    """Arithmetic mean rounded to 2 decimals; 0 for an empty input."""
    items = list(values)
    if not items:
        return 0.0
    return round(sum(items) / len(items), 2)
