"""NaN-aware per-axis means and sample standard deviations."""

import numpy as np


def count_valid(x: np.ndarray, axis: int) -> np.ndarray:
    """Number of non-NaN entries along `axis`."""
    return (~np.isnan(x)).sum(axis=axis)


def axis_mean(x: np.ndarray, axis: int) -> np.ndarray:
    """Arithmetic mean along `axis`, ignoring NaNs.

    A line with no valid entries has a NaN mean.

    Args:
        x: (R, C) array.
        axis: 0 for one mean per column, 1 for one mean per row.

    Returns:
        1-D array of means.
    """
    x = np.asarray(x, dtype=np.float64)
    n = count_valid(x, axis)
    total = np.where(np.isnan(x), 0.0, x).sum(axis=axis)
    with np.errstate(divide="ignore", invalid="ignore"):
        return total / n


def axis_sd(x: np.ndarray, mean: np.ndarray, axis: int) -> np.ndarray:
    """Sample standard deviation along `axis` around a precomputed mean.

    Squared deviations are summed over non-NaN entries and divided by n - 1.
    Lines with fewer than two valid entries come out NaN.

    Args:
        x: (R, C) array.
        mean: 1-D means along the same axis, as returned by `axis_mean`.
        axis: 0 for one value per column, 1 for one value per row.

    Returns:
        1-D array of standard deviations.
    """
    x = np.asarray(x, dtype=np.float64)
    mean = np.expand_dims(np.asarray(mean, dtype=np.float64), axis)
    n = count_valid(x, axis)
    dev = x - mean
    ss = np.where(np.isnan(x), 0.0, dev * dev).sum(axis=axis)
    with np.errstate(divide="ignore", invalid="ignore"):
        var = ss / (n - 1)
    var[n < 2] = np.nan
    return np.sqrt(var)
