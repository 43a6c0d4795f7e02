"""Tests for the normalization routine."""

import numpy as np
import pytest

from fastscale.core.normalize import (
    apply_stats,
    normalize,
    normalize_cols,
    normalize_rows,
    unscale,
)
from fastscale.types import Axis, ScaleStats, ShapeError


def test_normalize_known_small(small_matrix):
    """Columns [1,3,5] and [2,4,6] become [-1,0,1]."""
    result, stats = normalize(small_matrix)
    np.testing.assert_allclose(result, [[-1, -1], [0, 0], [1, 1]])
    np.testing.assert_allclose(stats.center, [3.0, 4.0])
    np.testing.assert_allclose(stats.scale, [2.0, 2.0])
    assert stats.axis is Axis.COLUMNS


def test_normalize_large_normal_matrix():
    """A 100000x100 N(14, 5^2) matrix comes out with mean 0 and SD 1 per column."""
    rng = np.random.default_rng(0)
    x = rng.normal(14.0, 5.0, size=(100_000, 100))
    result, _ = normalize(x, attach_stats=False)
    assert np.abs(result.mean(axis=0)).max() < 1e-10
    assert np.abs(result.std(axis=0, ddof=1) - 1.0).max() < 1e-6


def test_normalize_zscore_moments(random_matrix):
    result, _ = normalize_cols(random_matrix)
    np.testing.assert_allclose(result.mean(axis=0), 0.0, atol=1e-12)
    np.testing.assert_allclose(result.std(axis=0, ddof=1), 1.0)


def test_normalize_matches_direct_formula(random_matrix):
    expected = (random_matrix - random_matrix.mean(axis=0)) / random_matrix.std(axis=0, ddof=1)
    result, _ = normalize(random_matrix)
    np.testing.assert_allclose(result, expected)


def test_scale_only_uses_true_mean(random_matrix):
    """Without centering, columns are divided by the SD around the real mean."""
    result, stats = normalize(random_matrix, center=False)
    expected = random_matrix / random_matrix.std(axis=0, ddof=1)
    np.testing.assert_allclose(result, expected)
    assert stats.center is None
    np.testing.assert_allclose(stats.scale, random_matrix.std(axis=0, ddof=1))


def test_center_only(random_matrix):
    result, stats = normalize(random_matrix, scale=False)
    np.testing.assert_allclose(result, random_matrix - random_matrix.mean(axis=0))
    assert stats.scale is None
    np.testing.assert_allclose(stats.center, random_matrix.mean(axis=0))


def test_no_center_no_scale_is_copy(random_matrix):
    """Both steps disabled returns the data unchanged and no statistics."""
    result, stats = normalize(random_matrix, center=False, scale=False)
    np.testing.assert_array_equal(result, random_matrix)
    assert result is not random_matrix
    assert stats is None


def test_attach_stats_false(random_matrix):
    _, stats = normalize(random_matrix, attach_stats=False)
    assert stats is None


def test_rows_transpose_consistent(random_matrix):
    rows, row_stats = normalize_rows(random_matrix)
    cols, col_stats = normalize_cols(random_matrix.T)
    np.testing.assert_allclose(rows, cols.T)
    np.testing.assert_allclose(row_stats.center, col_stats.center)
    np.testing.assert_allclose(row_stats.scale, col_stats.scale)
    assert row_stats.axis is Axis.ROWS


def test_rows_statistics_align_with_rows():
    """Row statistics are applied per row even for a square matrix."""
    x = np.array([[1.0, 2.0, 3.0], [10.0, 20.0, 30.0], [0.0, 0.0, 3.0]])
    result, stats = normalize(x, axis="rows")
    np.testing.assert_allclose(stats.center, [2.0, 20.0, 1.0])
    np.testing.assert_allclose(result[0], [-1.0, 0.0, 1.0])
    np.testing.assert_allclose(result[1], [-1.0, 0.0, 1.0])


def test_axis_accepts_string(random_matrix):
    a, _ = normalize(random_matrix, axis="columns")
    b, _ = normalize(random_matrix, axis=Axis.COLUMNS)
    np.testing.assert_array_equal(a, b)


def test_invalid_axis_raises(random_matrix):
    with pytest.raises(ValueError):
        normalize(random_matrix, axis="diagonal")


def test_selectors_applied_before_statistics(random_matrix):
    rows = [0, 3, 4, 10, 22, 39]
    cols = [6, 1, 2]
    selected, stats = normalize(random_matrix, row_selector=rows, col_selector=cols)
    direct, direct_stats = normalize(random_matrix[np.ix_(rows, cols)])
    np.testing.assert_allclose(selected, direct)
    np.testing.assert_allclose(stats.center, direct_stats.center)
    assert selected.shape == (6, 3)


def test_row_selector_only(random_matrix):
    result, _ = normalize(random_matrix, row_selector=[1, 2, 3])
    expected, _ = normalize(random_matrix[[1, 2, 3]])
    np.testing.assert_allclose(result, expected)


def test_boolean_mask_selector(random_matrix):
    mask = np.zeros(7, dtype=bool)
    mask[[0, 2]] = True
    result, _ = normalize(random_matrix, col_selector=mask)
    expected, _ = normalize(random_matrix[:, [0, 2]])
    np.testing.assert_allclose(result, expected)


@pytest.mark.parametrize("rows, cols", [
    ([40], None),
    ([-1], None),
    (None, [7]),
    (None, [0, 100]),
])
def test_selector_out_of_range(random_matrix, rows, cols):
    with pytest.raises(IndexError):
        normalize(random_matrix, row_selector=rows, col_selector=cols)


def test_mask_wrong_length(random_matrix):
    with pytest.raises(IndexError):
        normalize(random_matrix, col_selector=np.ones(3, dtype=bool))


@pytest.mark.parametrize("bad", [
    np.arange(5.0),
    np.zeros((2, 2, 2)),
    np.float64(3.0),
    [[1.0, 2.0], [3.0]],
])
def test_non_matrix_raises_shape_error(bad):
    with pytest.raises(ShapeError):
        normalize(bad)


def test_shape_error_is_value_error():
    assert issubclass(ShapeError, ValueError)


def test_input_not_mutated(random_matrix):
    before = random_matrix.copy()
    normalize(random_matrix)
    normalize(random_matrix, axis="rows", center=False)
    np.testing.assert_array_equal(random_matrix, before)


def test_nan_entries_ignored_and_kept(matrix_with_nans):
    result, stats = normalize(matrix_with_nans)
    # NaN inputs stay NaN, other entries in that column are normalized.
    assert np.isnan(result[[0, 5, 9], 1]).all()
    valid = ~np.isnan(matrix_with_nans[:, 1])
    col = result[valid, 1]
    assert col.mean() == pytest.approx(0.0, abs=1e-12)
    assert col.std(ddof=1) == pytest.approx(1.0)


def test_all_nan_column_propagates(matrix_with_nans):
    result, stats = normalize(matrix_with_nans)
    assert np.isnan(stats.center[6])
    assert np.isnan(stats.scale[6])
    assert np.isnan(result[:, 6]).all()


def test_constant_column_gives_non_finite():
    """Zero SD is not trapped: centered zeros divided by zero become NaN."""
    x = np.array([[2.0, 1.0], [2.0, 3.0], [2.0, 5.0]])
    result, stats = normalize(x)
    assert stats.scale[0] == 0.0
    assert not np.isfinite(result[:, 0]).any()
    np.testing.assert_allclose(result[:, 1], [-1.0, 0.0, 1.0])


def test_constant_column_scale_only_is_infinite():
    x = np.array([[2.0, 1.0], [2.0, 3.0], [2.0, 5.0]])
    result, _ = normalize(x, center=False)
    assert np.isinf(result[:, 0]).all()


def test_single_row_is_nan():
    result, stats = normalize(np.array([[1.0, 2.0, 3.0]]))
    assert np.isnan(stats.scale).all()
    assert np.isnan(result).all()


def test_normalize_twice_does_not_reproduce_stats(random_matrix):
    """A second pass records mean 0 / SD 1, not the original factors."""
    once, first = normalize(random_matrix)
    _, second = normalize(once)
    np.testing.assert_allclose(second.center, 0.0, atol=1e-12)
    np.testing.assert_allclose(second.scale, 1.0)
    assert not np.allclose(second.center, first.center)
    assert not np.allclose(second.scale, first.scale)


def test_normalize_twice_tiny_input_degenerates():
    """With a single observation the first pass is already undefined."""
    once, _ = normalize(np.array([[4.0, 8.0]]))
    twice, stats = normalize(once)
    assert np.isnan(once).all()
    assert np.isnan(twice).all()
    assert np.isnan(stats.scale).all()


def test_apply_stats_reproduces_normalize(random_matrix):
    result, stats = normalize(random_matrix)
    np.testing.assert_allclose(apply_stats(random_matrix, stats), result)


def test_apply_stats_to_new_data(rng, random_matrix):
    _, stats = normalize(random_matrix, axis="columns")
    new = rng.standard_normal((5, 7))
    expected = (new - stats.center) / stats.scale
    np.testing.assert_allclose(apply_stats(new, stats), expected)


def test_apply_stats_partial_stats(random_matrix):
    _, stats = normalize(random_matrix, scale=False)
    np.testing.assert_allclose(
        apply_stats(random_matrix, stats), random_matrix - random_matrix.mean(axis=0)
    )


def test_apply_stats_length_mismatch(random_matrix):
    _, stats = normalize(random_matrix)
    with pytest.raises(ShapeError):
        apply_stats(random_matrix[:, :3], stats)


def test_unscale_roundtrip_rows(random_matrix):
    result, stats = normalize(random_matrix, axis=Axis.ROWS)
    np.testing.assert_allclose(unscale(result, stats), random_matrix)


def test_unscale_with_empty_stats(random_matrix):
    """Stats with neither factor act as the identity."""
    stats = ScaleStats(axis=Axis.COLUMNS)
    np.testing.assert_array_equal(unscale(random_matrix, stats), random_matrix)
