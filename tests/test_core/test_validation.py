"""Tests for output checks."""

import numpy as np
import pytest

from fastscale.core.normalize import normalize
from fastscale.core.validation import axis_moments, max_abs_difference
from fastscale.types import ShapeError


def test_axis_moments_after_normalize(random_matrix):
    result, _ = normalize(random_matrix, axis="rows")
    means, sds = axis_moments(result, axis="rows")
    np.testing.assert_allclose(means, 0.0, atol=1e-12)
    np.testing.assert_allclose(sds, 1.0)


def test_max_abs_difference_basic():
    a = np.array([[1.0, 2.0], [3.0, 4.0]])
    b = a + np.array([[0.0, 0.5], [0.0, -0.25]])
    assert max_abs_difference(a, b) == pytest.approx(0.5)


def test_max_abs_difference_matching_nans():
    a = np.array([[np.nan, 1.0]])
    assert max_abs_difference(a, a.copy()) == 0.0


def test_max_abs_difference_mismatched_nans():
    a = np.array([[np.nan, 1.0]])
    b = np.array([[0.0, 1.0]])
    assert max_abs_difference(a, b) == np.inf


def test_max_abs_difference_matching_infinities():
    a = np.array([[np.inf, -np.inf, 1.0]])
    assert max_abs_difference(a, a.copy()) == 0.0


def test_max_abs_difference_shape_mismatch():
    with pytest.raises(ShapeError):
        max_abs_difference(np.zeros((2, 2)), np.zeros((2, 3)))
