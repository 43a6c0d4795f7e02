"""Checks on normalized output."""

import numpy as np

from fastscale.math.stats import axis_mean, axis_sd
from fastscale.types import Axis, ShapeError


def axis_moments(x: np.ndarray, axis: Axis | str = Axis.COLUMNS) -> tuple[np.ndarray, np.ndarray]:
    """Per-line mean and sample standard deviation.

    For a z-scored matrix these should be close to 0 and 1.

    Args:
        x: (R, C) array.
        axis: Orientation to summarize.

    Returns:
        (means, sds), each 1-D.
    """
    ax = Axis(axis).reduce_axis
    x = np.asarray(x, dtype=np.float64)
    means = axis_mean(x, ax)
    return means, axis_sd(x, means, ax)


def max_abs_difference(a: np.ndarray, b: np.ndarray) -> float:
    """Largest entrywise absolute difference between two results.

    NaNs in the same position count as equal; a NaN facing a number makes
    the difference infinite.
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if a.shape != b.shape:
        raise ShapeError(f"Shape mismatch: {a.shape} vs {b.shape}")
    if a.size == 0:
        return 0.0

    nan_a = np.isnan(a)
    nan_b = np.isnan(b)
    if (nan_a != nan_b).any():
        return float("inf")

    valid = ~nan_a
    if not valid.any():
        return 0.0
    a, b = a[valid], b[valid]
    # Equal infinities match.
    with np.errstate(invalid="ignore"):
        diff = np.where(a == b, 0.0, np.abs(a - b))
    return float(diff.max())
