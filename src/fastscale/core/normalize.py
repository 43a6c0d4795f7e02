"""Column-wise and row-wise z-score normalization.

Centers and scales a matrix along one axis, recording the factors used so
they can be reported, reapplied to new data, or undone.
"""

from collections.abc import Sequence

import numpy as np

from fastscale.core.selection import as_matrix, subset
from fastscale.math.stats import axis_mean, axis_sd
from fastscale.types import Axis, ScaleStats, ShapeError


def normalize(
    matrix,
    axis: Axis | str = Axis.COLUMNS,
    center: bool = True,
    scale: bool = True,
    attach_stats: bool = True,
    row_selector: Sequence[int] | np.ndarray | None = None,
    col_selector: Sequence[int] | np.ndarray | None = None,
) -> tuple[np.ndarray, ScaleStats | None]:
    """Center and/or scale a matrix along its columns or rows.

    The result is `(x - center) / scale` per column (or per row), where
    center is the NaN-ignoring mean and scale the sample standard deviation
    (n - 1) around that mean. A disabled step uses 0 for the center or 1 for
    the scale, so every combination of flags goes through the same
    arithmetic. Zero or undefined standard deviations propagate as inf/NaN.

    Args:
        matrix: (R, C) numeric array. Never modified.
        axis: Axis.COLUMNS (one statistic per column) or Axis.ROWS.
        center: Subtract the per-line mean.
        scale: Divide by the per-line standard deviation.
        attach_stats: Return the factors alongside the result.
        row_selector: Optional row indices or boolean mask applied first.
        col_selector: Optional column indices or boolean mask applied second.

    Returns:
        result: Normalized (R', C') array, shaped like the selected input.
        stats: ScaleStats holding the requested factors, or None when
            attach_stats is False or neither step was requested.
    """
    axis = Axis(axis)
    x = subset(as_matrix(matrix), row_selector, col_selector)
    ax = axis.reduce_axis

    mean = axis_mean(x, ax)
    if scale:
        sd = axis_sd(x, mean, ax)
    else:
        sd = np.ones_like(mean)
    if not center:
        mean = np.zeros_like(mean)

    result = _center_scale(x, mean, sd, ax)

    if not attach_stats or not (center or scale):
        return result, None
    stats = ScaleStats(
        axis=axis,
        center=mean if center else None,
        scale=sd if scale else None,
    )
    return result, stats


def normalize_cols(matrix, **kwargs) -> tuple[np.ndarray, ScaleStats | None]:
    """Normalize each column. See `normalize`."""
    return normalize(matrix, axis=Axis.COLUMNS, **kwargs)


def normalize_rows(matrix, **kwargs) -> tuple[np.ndarray, ScaleStats | None]:
    """Normalize each row. See `normalize`."""
    return normalize(matrix, axis=Axis.ROWS, **kwargs)


def apply_stats(matrix, stats: ScaleStats) -> np.ndarray:
    """Center and scale new data with previously recorded factors."""
    x = as_matrix(matrix)
    mean, sd = _factors(x, stats)
    return _center_scale(x, mean, sd, stats.axis.reduce_axis)


def unscale(matrix, stats: ScaleStats) -> np.ndarray:
    """Invert `apply_stats`: multiply by the scale, then add the center back."""
    x = as_matrix(matrix)
    mean, sd = _factors(x, stats)
    ax = stats.axis.reduce_axis
    return x * np.expand_dims(sd, ax) + np.expand_dims(mean, ax)


def _factors(x: np.ndarray, stats: ScaleStats) -> tuple[np.ndarray, np.ndarray]:
    """Recorded center/scale vectors, with identity values for missing ones."""
    n = x.shape[1 - stats.axis.reduce_axis]
    if stats.size and stats.size != n:
        raise ShapeError(
            f"Statistics have {stats.size} entries but the matrix has {n} "
            f"{stats.axis.value}"
        )
    mean = np.zeros(n) if stats.center is None else np.asarray(stats.center, dtype=np.float64)
    sd = np.ones(n) if stats.scale is None else np.asarray(stats.scale, dtype=np.float64)
    return mean, sd


def _center_scale(x: np.ndarray, mean: np.ndarray, sd: np.ndarray, ax: int) -> np.ndarray:
    # Statistics are re-expanded along the reduced axis so a row vector
    # never broadcasts across columns.
    with np.errstate(divide="ignore", invalid="ignore"):
        return (x - np.expand_dims(mean, ax)) / np.expand_dims(sd, ax)
