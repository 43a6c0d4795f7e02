"""Write and read recorded normalization statistics."""

from pathlib import Path

import numpy as np

from fastscale.io.mat_interop import load_arrays, save_arrays
from fastscale.types import Axis, FileFormat, ScaleStats

# Axis is stored as an integer code so every archive format can hold it.
_AXIS_CODES = {Axis.COLUMNS: 0, Axis.ROWS: 1}


def write_stats(
    path: str | Path,
    stats: ScaleStats,
    fmt: FileFormat = FileFormat.AUTO,
) -> None:
    """Write a ScaleStats to a .npz or .mat file."""
    data = {"axis": np.array([_AXIS_CODES[stats.axis]], dtype=np.int32)}
    if stats.center is not None:
        data["center"] = np.asarray(stats.center, dtype=np.float64)
    if stats.scale is not None:
        data["scale"] = np.asarray(stats.scale, dtype=np.float64)
    save_arrays(path, data, fmt=fmt)


def read_stats(path: str | Path) -> ScaleStats:
    """Read a ScaleStats written by `write_stats`."""
    path = Path(path)
    raw = load_arrays(path)
    if "axis" not in raw:
        raise ValueError(f"No normalization statistics in {path}")

    code = int(np.asarray(raw["axis"]).ravel()[0])
    axes = {v: k for k, v in _AXIS_CODES.items()}
    if code not in axes:
        raise ValueError(f"Unknown axis code {code} in {path}")

    return ScaleStats(
        axis=axes[code],
        center=_optional_vector(raw, "center"),
        scale=_optional_vector(raw, "scale"),
    )


def _optional_vector(raw: dict[str, np.ndarray], name: str) -> np.ndarray | None:
    if name not in raw:
        return None
    return np.asarray(raw[name], dtype=np.float64).ravel()
