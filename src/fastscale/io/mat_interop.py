"""Load and save matrices as .npy, .npz, .mat (v5 and v7.3) and .csv files."""

import logging
from pathlib import Path

import h5py
import numpy as np
import scipy.io as sio

from fastscale.types import FileFormat

logger = logging.getLogger(__name__)

_SUFFIX_FORMATS = {
    ".npy": FileFormat.NPY,
    ".npz": FileFormat.NPZ,
    ".mat": FileFormat.MAT_V5,
    ".csv": FileFormat.CSV,
}


def _is_hdf5(path: Path) -> bool:
    """Check if a file is HDF5 format by reading its magic bytes."""
    with open(path, "rb") as f:
        return f.read(8) == b"\x89HDF\r\n\x1a\n"


def load_arrays(path: str | Path) -> dict[str, np.ndarray]:
    """Load every named array from a .npz or .mat file, auto-detecting format."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    if path.suffix == ".npz":
        with np.load(str(path)) as npz:
            return dict(npz)

    if path.suffix != ".mat":
        raise ValueError(f"Not an array archive: {path.name}")

    if _is_hdf5(path):
        result = {}
        with h5py.File(str(path), "r") as f:
            for key in f.keys():
                if key.startswith("#"):
                    continue
                # MATLAB v7.3 stores arrays transposed.
                result[key] = np.array(f[key]).T
        return result

    raw = sio.loadmat(str(path))
    return {k: v for k, v in raw.items() if not k.startswith("_")}


def load_matrix(path: str | Path, variable: str | None = None) -> np.ndarray:
    """Read a single matrix, dispatching on file extension.

    Supports:
      - .npy arrays
      - .npz and .mat archives; `variable` picks the array when there
        is more than one
      - .csv files without a header; empty fields are read as NaN

    Returns a float64 array.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    suffix = path.suffix
    if suffix == ".npy":
        data = np.load(str(path))
    elif suffix == ".csv":
        data = np.genfromtxt(str(path), delimiter=",", dtype=np.float64, ndmin=2)
    elif suffix in (".npz", ".mat"):
        arrays = load_arrays(path)
        data = _pick_variable(arrays, variable, path)
    else:
        raise ValueError(f"Unsupported file extension: {path.name}")

    logger.debug("Loaded %s array from %s", data.shape, path)
    return np.asarray(data, dtype=np.float64)


def _pick_variable(arrays: dict[str, np.ndarray], variable: str | None, path: Path) -> np.ndarray:
    if variable is not None:
        if variable not in arrays:
            raise ValueError(
                f"Variable '{variable}' not in {path.name}; available: {sorted(arrays)}"
            )
        return arrays[variable]
    if len(arrays) != 1:
        raise ValueError(
            f"{path.name} holds {len(arrays)} arrays {sorted(arrays)}; pass a variable name"
        )
    return next(iter(arrays.values()))


def save_arrays(
    path: str | Path,
    data: dict[str, np.ndarray],
    fmt: FileFormat = FileFormat.AUTO,
) -> None:
    """Save named arrays to a .npz or .mat file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if fmt == FileFormat.AUTO:
        fmt = _SUFFIX_FORMATS.get(path.suffix)
        if fmt not in (FileFormat.NPZ, FileFormat.MAT_V5):
            raise ValueError(f"Cannot auto-detect archive format for extension: {path.suffix}")

    if fmt == FileFormat.MAT_V5:
        sio.savemat(str(path), data)
    elif fmt == FileFormat.MAT_V73:
        with h5py.File(str(path), "w") as f:
            for key, val in data.items():
                f.create_dataset(key, data=np.asarray(val).T)
    elif fmt == FileFormat.NPZ:
        np.savez(str(path), **data)
    else:
        raise ValueError(f"Unsupported archive format: {fmt}")


def save_matrix(
    path: str | Path,
    matrix: np.ndarray,
    fmt: FileFormat = FileFormat.AUTO,
    variable: str = "x",
) -> None:
    """Save a single matrix; archive formats store it under `variable`."""
    path = Path(path)
    if fmt == FileFormat.AUTO:
        fmt = _SUFFIX_FORMATS.get(path.suffix)
        if fmt is None:
            raise ValueError(f"Cannot auto-detect format for extension: {path.suffix}")

    matrix = np.asarray(matrix, dtype=np.float64)
    if fmt == FileFormat.NPY:
        path.parent.mkdir(parents=True, exist_ok=True)
        np.save(str(path), matrix)
    elif fmt == FileFormat.CSV:
        path.parent.mkdir(parents=True, exist_ok=True)
        np.savetxt(str(path), matrix, delimiter=",", fmt="%.17g")
    else:
        save_arrays(path, {variable: matrix}, fmt=fmt)
    logger.debug("Saved %s array to %s", matrix.shape, path)
