"""Benchmark the normalization routine against scipy.stats.zscore.

Times repeated calls of each implementation on the same matrix, checks
that they agree, and optionally plots the distribution of call times.
"""

import logging
import time
from collections.abc import Callable
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
from scipy import stats as sps

from fastscale.core.normalize import normalize
from fastscale.core.validation import max_abs_difference
from fastscale.io.mat_interop import save_arrays
from fastscale.types import Axis, BenchmarkResult

logger = logging.getLogger(__name__)


def make_normal_matrix(
    n_rows: int,
    n_cols: int,
    mean: float = 14.0,
    sd: float = 5.0,
    seed: int | None = None,
) -> np.ndarray:
    """Draw an (n_rows, n_cols) matrix from N(mean, sd^2)."""
    if n_rows < 1 or n_cols < 1:
        raise ValueError(f"Matrix dimensions must be positive, got {n_rows}x{n_cols}")
    rng = np.random.default_rng(seed)
    return rng.normal(loc=mean, scale=sd, size=(n_rows, n_cols))


def reference_zscore(matrix: np.ndarray, axis: Axis | str = Axis.COLUMNS) -> np.ndarray:
    """Z-score with scipy using the same n - 1 convention."""
    ax = Axis(axis).reduce_axis
    matrix = np.asarray(matrix, dtype=np.float64)
    nan_policy = "omit" if np.isnan(matrix).any() else "propagate"
    with np.errstate(divide="ignore", invalid="ignore"):
        return sps.zscore(matrix, axis=ax, ddof=1, nan_policy=nan_policy)


def time_call(func: Callable[[], object], repeats: int) -> np.ndarray:
    """Wall-clock seconds for each of `repeats` calls to `func`."""
    if repeats < 1:
        raise ValueError(f"repeats must be at least 1, got {repeats}")
    timings = np.empty(repeats, dtype=np.float64)
    for i in range(repeats):
        start = time.perf_counter()
        func()
        timings[i] = time.perf_counter() - start
    return timings


def run_benchmark(
    matrix: np.ndarray,
    axis: Axis | str = Axis.COLUMNS,
    repeats: int = 10,
    check: bool = True,
    atol: float = 1e-8,
) -> BenchmarkResult:
    """Time fastscale and scipy on the same matrix.

    Args:
        matrix: (R, C) input.
        axis: Orientation to normalize.
        repeats: Timed calls per implementation.
        check: Verify both implementations agree before timing.
        atol: Largest tolerated entrywise difference when checking.

    Returns:
        BenchmarkResult with per-call timings keyed "fastscale" and "scipy".
    """
    axis = Axis(axis)
    matrix = np.asarray(matrix, dtype=np.float64)

    candidates = {
        "fastscale": lambda: normalize(matrix, axis=axis, attach_stats=False)[0],
        "scipy": lambda: reference_zscore(matrix, axis=axis),
    }

    if check:
        diff = max_abs_difference(candidates["fastscale"](), candidates["scipy"]())
        logger.info("  Max abs difference vs scipy: %.3e", diff)
        if not diff <= atol:
            raise ValueError(
                f"fastscale and scipy disagree: max abs difference {diff:.3e} > {atol:.1e}"
            )

    result = BenchmarkResult(shape=matrix.shape, axis=axis, repeats=repeats)
    for name, func in candidates.items():
        logger.info("  Timing %s (%d calls)", name, repeats)
        result.timings[name] = time_call(func, repeats)
    return result


def benchmark_normal(
    n_rows: int = 100_000,
    n_cols: int = 100,
    mean: float = 14.0,
    sd: float = 5.0,
    repeats: int = 10,
    axis: Axis | str = Axis.COLUMNS,
    seed: int | None = None,
    plot_path: str | Path | None = None,
    output_path: str | Path | None = None,
) -> BenchmarkResult:
    """Generate a normal matrix, benchmark on it, and save the outputs.

    Args:
        n_rows, n_cols: Matrix shape.
        mean, sd: Parameters of the normal distribution sampled.
        repeats: Timed calls per implementation.
        axis: Orientation to normalize.
        seed: Random seed for the matrix.
        plot_path: Optional image file for the timing boxplot.
        output_path: Optional .npz/.mat file for raw per-call timings.

    Returns:
        BenchmarkResult.
    """
    settings = {
        "n_rows": n_rows,
        "n_cols": n_cols,
        "mean": mean,
        "sd": sd,
        "repeats": repeats,
        "axis": Axis(axis).value,
        "seed": seed,
    }
    logger.info("Benchmark settings: %s", settings)

    matrix = make_normal_matrix(n_rows, n_cols, mean=mean, sd=sd, seed=seed)
    result = run_benchmark(matrix, axis=axis, repeats=repeats)

    if plot_path is not None:
        plot_timings(result, plot_path)
    if output_path is not None:
        save_arrays(output_path, dict(result.timings))
        logger.info("Saved raw timings to %s", output_path)
    return result


def format_summary(result: BenchmarkResult) -> str:
    """Render the timing summary as a fixed-width table."""
    rows, cols = result.shape
    lines = [
        f"{rows}x{cols} matrix, {result.axis.value}, {result.repeats} calls",
        f"{'impl':<12}{'min':>10}{'median':>10}{'mean':>10}{'max':>10}  (ms)",
    ]
    for name, s in result.summary().items():
        lines.append(
            f"{name:<12}{s['min']:>10.3f}{s['median']:>10.3f}"
            f"{s['mean']:>10.3f}{s['max']:>10.3f}"
        )
    return "\n".join(lines)


def plot_timings(result: BenchmarkResult, path: str | Path) -> Path:
    """Save a boxplot of per-call timings (ms) for each implementation."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    names = list(result.timings)
    data = [np.asarray(result.timings[n]) * 1e3 for n in names]

    fig, ax = plt.subplots(figsize=(6, 4))
    ax.boxplot(data)
    ax.set_xticks(range(1, len(names) + 1))
    ax.set_xticklabels(names)
    ax.set_ylabel("time per call (ms)")
    rows, cols = result.shape
    ax.set_title(f"{rows}x{cols}, {result.axis.value}, {result.repeats} calls")
    fig.tight_layout()
    fig.savefig(str(path))
    plt.close(fig)

    logger.info("Saved timing plot to %s", path)
    return path
