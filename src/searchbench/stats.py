from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from .errors import StatisticsError

CANONICAL_PERCENTILES: tuple[float, ...] = (0.50, 0.66, 0.75, 0.80, 0.90, 0.95, 0.98, 0.99, 1.00)


@dataclass
class Summary:
    mean: float
    # fraction -> sample value, ascending by fraction
    percentiles: dict[float, int] = field(default_factory=dict)
    count: int = 0


def mean(samples: Sequence[int]) -> float:
    if not samples:
        raise StatisticsError("cannot compute mean of an empty sample set")
    return sum(samples) / len(samples)


def percentile_index(fraction: float, n: int) -> int:
    """Index into an ascending sample list of length ``n`` for ``fraction``.

    Uses ``floor(fraction * n) - 1``. Small fractions over few samples give a
    negative index; those clamp to 0, the minimum sample.
    """
    if n < 1:
        raise StatisticsError("cannot select a percentile from an empty sample set")
    if not 0.0 < fraction <= 1.0:
        raise StatisticsError(f"percentile fraction must be in (0, 1], got {fraction!r}")
    # round first so 0.66 * 50 is 33, not 32.99999...
    idx = math.floor(round(fraction * n, 9)) - 1
    idx = max(idx, 0)
    if idx > n - 1:
        raise StatisticsError(f"percentile index {idx} outside [0, {n - 1}]")
    return idx


def percentile(sorted_samples: Sequence[int], fraction: float) -> int:
    return sorted_samples[percentile_index(fraction, len(sorted_samples))]


def summarize(
    samples: Sequence[int],
    fractions: Iterable[float] = CANONICAL_PERCENTILES,
) -> Summary:
    """Mean and percentile table over ``samples``.

    Percentiles are read from a sorted copy; ``samples`` itself is left in
    execution order.
    """
    avg = mean(samples)
    ordered = sorted(samples)
    table = {p: percentile(ordered, p) for p in sorted(fractions)}
    return Summary(mean=avg, percentiles=table, count=len(ordered))
