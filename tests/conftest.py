"""Shared fixtures for fastscale tests."""

import numpy as np
import pytest


@pytest.fixture
def rng():
    """Reproducible random number generator."""
    return np.random.default_rng(42)


@pytest.fixture
def small_matrix():
    """3x2 matrix with column means [3, 4] and sample SDs [2, 2]."""
    return np.array([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]])


@pytest.fixture
def random_matrix(rng):
    """Random (40, 7) matrix with shifted, stretched columns."""
    return rng.standard_normal((40, 7)) * np.arange(1, 8) + np.arange(7) * 10.0


@pytest.fixture
def matrix_with_nans(random_matrix):
    """random_matrix with a few scattered NaNs and one all-NaN column."""
    x = random_matrix.copy()
    x[[0, 5, 9], 1] = np.nan
    x[3, 4] = np.nan
    x[:, 6] = np.nan
    return x
