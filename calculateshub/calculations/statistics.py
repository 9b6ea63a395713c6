"""
Descriptive Statistics

Small-sample statistics for the math calculators, computed with numpy.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np

from calculateshub.calculations.primitives import is_finite


@dataclass(frozen=True)
class Summary:
    """Central tendency of a sample."""

    count: int
    mean: float
    median: float
    mode: float


def finite_values(values: Iterable[float]) -> np.ndarray:
    """Keep only the finite entries as a float array."""
    return np.array([v for v in values if is_finite(v)], dtype=float)


def describe(values: Sequence[float]) -> Optional[Summary]:
    """
    Mean, median and mode of the finite values.

    The mode is the most frequent value; ties go to the smallest value.

    Returns:
        Summary, or None when there are no finite values
    """
    data = finite_values(values)
    if data.size == 0:
        return None
    uniques, counts = np.unique(data, return_counts=True)
    return Summary(
        count=int(data.size),
        mean=float(np.mean(data)),
        median=float(np.median(data)),
        mode=float(uniques[np.argmax(counts)]),
    )


def population_std(values: Sequence[float]) -> Optional[float]:
    """Population standard deviation (divides by n) of the finite values."""
    data = finite_values(values)
    if data.size == 0:
        return None
    return float(np.std(data))


def weighted_average(pairs: Iterable[Tuple[float, float]]) -> Optional[Tuple[float, float]]:
    """
    Weighted average of (value, weight) pairs.

    Pairs with a non-finite value or weight, or a weight <= 0, are ignored.

    Returns:
        (average, total weight), or None when no weight remains
    """
    kept = [(v, w) for v, w in pairs if is_finite(v) and is_finite(w) and w > 0]
    if not kept:
        return None
    values = np.array([v for v, _ in kept], dtype=float)
    weights = np.array([w for _, w in kept], dtype=float)
    total = float(weights.sum())
    return float(np.dot(values, weights) / total), total
