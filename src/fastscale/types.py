"""Data types for fastscale."""

from dataclasses import dataclass, field
from enum import Enum

import numpy as np
from numpy.typing import NDArray


class ShapeError(ValueError):
    """Input is not a rectangular 2-D numeric array."""


class Axis(Enum):
    """Orientation along which statistics are computed."""

    COLUMNS = "columns"
    ROWS = "rows"

    @property
    def reduce_axis(self) -> int:
        """Array axis collapsed when computing one statistic per line."""
        return 0 if self is Axis.COLUMNS else 1


class FileFormat(Enum):
    """Supported file formats for saving/loading data."""

    NPY = "npy"
    NPZ = "npz"
    MAT_V5 = "mat_v5"
    MAT_V73 = "mat_v73"
    CSV = "csv"
    AUTO = "auto"


@dataclass
class ScaleStats:
    """Centering and scaling factors recorded by a normalization.

    Attributes:
        axis: Orientation the factors apply to.
        center: Per-line means, or None if centering was not requested.
        scale: Per-line standard deviations, or None if scaling was not requested.
    """

    axis: Axis
    center: NDArray[np.floating] | None = None
    scale: NDArray[np.floating] | None = None

    @property
    def size(self) -> int:
        for vec in (self.center, self.scale):
            if vec is not None:
                return len(vec)
        return 0


@dataclass
class BenchmarkResult:
    """Per-call timings for each benchmarked implementation.

    Attributes:
        shape: Shape of the benchmarked matrix.
        axis: Orientation normalized.
        repeats: Number of timed calls per implementation.
        timings: Implementation name -> (repeats,) seconds per call.
    """

    shape: tuple[int, int]
    axis: Axis
    repeats: int
    timings: dict[str, NDArray[np.floating]] = field(default_factory=dict)

    def summary(self) -> dict[str, dict[str, float]]:
        """Min/median/mean/max in milliseconds per implementation."""
        out = {}
        for name, secs in self.timings.items():
            ms = np.asarray(secs, dtype=np.float64) * 1e3
            out[name] = {
                "min": float(ms.min()),
                "median": float(np.median(ms)),
                "mean": float(ms.mean()),
                "max": float(ms.max()),
            }
        return out
