"""Descriptive statistics for numeric samples."""

from __future__ import annotations

import math
import statistics
from collections.abc import Iterable

from .dto import Stats


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves rounded towards +infinity.

    Unlike the built-in `round`, `2.5 -> 3` and `-2.5 -> -2`.
    """

    return math.floor(value + 0.5)


def compute_stats(values: Iterable[float]) -> Stats:
    """Compute count/min/max/mean/median/std-dev over a sample.

    Args:
        values: Numeric sample; may be empty.

    Returns:
        Stats with every field except `count` rounded to the nearest integer.
        An empty sample yields all zeros. The standard deviation is the
        population standard deviation.
    """

    sample = list(values)
    if not sample:
        return Stats()

    mean = statistics.fmean(sample)
    return Stats(
        count=len(sample),
        min=round_half_up(min(sample)),
        max=round_half_up(max(sample)),
        mean=round_half_up(mean),
        median=round_half_up(statistics.median(sample)),
        std_dev=round_half_up(statistics.pstdev(sample, mu=mean)),
    )
