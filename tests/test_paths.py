import math

import numpy as np
import pytest

from compfin.paths import cum_sum, gbm_price_paths, wiener_increments


def test_cum_sum_last_column_is_row_sum():
    m = np.array([[1.0, 2.0, 3.0], [4.0, -5.0, 6.5]])
    out = cum_sum(m)
    assert np.allclose(out[:, -1], m.sum(axis=1))
    assert np.allclose(np.diff(out, axis=1), m[:, 1:])
    assert np.allclose(out[:, 0], m[:, 0])


def test_cum_sum_rejects_vector():
    with pytest.raises(ValueError):
        cum_sum([1.0, 2.0])


def test_wiener_increments_antithetic():
    mat = wiener_increments(10, 5, 0.01, 123456)
    assert mat.shape == (10, 5)
    assert np.allclose(mat[5:], -mat[:5])


def test_wiener_increments_odd_rows_leave_last_zero():
    mat = wiener_increments(7, 4, 0.1, 1)
    assert np.all(mat[-1] == 0.0)
    assert np.allclose(mat[3:6], -mat[:3])


def test_wiener_increments_reproducible_and_scaled():
    a = wiener_increments(2000, 50, 0.04, 654321)
    b = wiener_increments(2000, 50, 0.04, 654321)
    assert np.array_equal(a, b)
    assert abs(a.std() - math.sqrt(0.04)) < 0.01
    assert abs(a.mean()) < 1e-12


def test_wiener_increments_rejects_negative_step():
    with pytest.raises(ValueError):
        wiener_increments(4, 4, -0.1, 1)


def test_gbm_paths_shape_and_start():
    paths = gbm_price_paths(20, 30, 1.0, 100.0, 0.05, 0.3, 7)
    assert paths.shape == (30, 20)
    assert np.all(paths[:, 0] == 100.0)
    assert np.all(paths > 0)


def test_gbm_paths_without_volatility_grow_deterministically():
    n_steps, T, r = 10, 2.0, 0.05
    paths = gbm_price_paths(n_steps, 3, T, 50.0, r, 0.0, 1)
    dt = T / n_steps
    expected = 50.0 * np.exp(r * dt * np.arange(n_steps))
    assert np.allclose(paths, expected)


def test_gbm_paths_martingale_mean():
    n_steps, T, r = 11, 1.0, 0.05
    paths = gbm_price_paths(n_steps, 20000, T, 100.0, r, 0.2)
    dt = T / n_steps
    expected_last = 100.0 * math.exp(r * dt * (n_steps - 1))
    assert abs(paths[:, -1].mean() / expected_last - 1) < 0.01


def test_gbm_paths_rejects_zero_steps():
    with pytest.raises(ValueError):
        gbm_price_paths(0, 5, 1.0, 100.0, 0.05, 0.2)