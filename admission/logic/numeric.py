"""
Small numeric helpers shared by the engine.
"""

import math
from typing import Sequence


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def population_variance(values: Sequence[float]) -> float:
    """Variance over the whole series (divides by n, not n - 1)."""
    avg = mean(values)
    return sum((v - avg) ** 2 for v in values) / len(values)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
