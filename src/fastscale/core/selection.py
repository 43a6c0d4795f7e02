"""Row/column selectors applied before statistics are computed."""

from collections.abc import Sequence

import numpy as np

from fastscale.types import ShapeError


def as_matrix(matrix) -> np.ndarray:
    """Convert input to a 2-D float64 array, raising ShapeError otherwise."""
    try:
        x = np.asarray(matrix, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise ShapeError(f"Input is not a rectangular numeric array: {exc}") from exc
    if x.ndim != 2:
        raise ShapeError(f"Expected a 2-D matrix, got {x.ndim} dimension(s) with shape {x.shape}")
    return x


def resolve_selector(
    selector: Sequence[int] | np.ndarray | None,
    size: int,
    name: str,
) -> np.ndarray | None:
    """Turn a selector into validated integer indices.

    Args:
        selector: None, integer indices, or a boolean mask of length `size`.
        size: Length of the dimension being selected.
        name: "row" or "column", used in error messages.

    Returns:
        Integer index array, or None when `selector` is None.
    """
    if selector is None:
        return None

    idx = np.asarray(selector)
    if idx.ndim != 1:
        raise IndexError(f"{name} selector must be one-dimensional, got shape {idx.shape}")

    if idx.dtype == bool:
        if len(idx) != size:
            raise IndexError(
                f"{name} mask has length {len(idx)} but the matrix has {size} {name}s"
            )
        return np.flatnonzero(idx)

    if idx.size == 0:
        return np.zeros(0, dtype=np.intp)
    if not np.issubdtype(idx.dtype, np.integer):
        raise IndexError(f"{name} selector must contain integers, got dtype {idx.dtype}")

    bad = (idx < 0) | (idx >= size)
    if bad.any():
        raise IndexError(
            f"{name} index {int(idx[bad][0])} out of range [0, {size})"
        )
    return idx.astype(np.intp)


def subset(
    x: np.ndarray,
    row_selector: Sequence[int] | np.ndarray | None = None,
    col_selector: Sequence[int] | np.ndarray | None = None,
) -> np.ndarray:
    """Narrow a matrix to the selected rows, then the selected columns."""
    rows = resolve_selector(row_selector, x.shape[0], "row")
    cols = resolve_selector(col_selector, x.shape[1], "column")
    if rows is not None:
        x = x[rows, :]
    if cols is not None:
        x = x[:, cols]
    return x
