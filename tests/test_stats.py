import math

import pytest

from compfin import stats


def test_mean_of_constant_series():
    assert stats.mean([4.5] * 7) == pytest.approx(4.5)


def test_mean_empty_raises():
    with pytest.raises(ValueError):
        stats.mean([])


def test_stdev_constant_is_zero():
    assert stats.stdev([3.0, 3.0, 3.0, 3.0]) == pytest.approx(0.0)


def test_stdev_single_value_is_zero():
    assert stats.stdev([42.0]) == 0.0


def test_stdev_shift_invariant():
    data = [1.0, 4.0, 2.5, 9.0, -3.0]
    assert stats.stdev(stats.shift(data, 100.0)) == pytest.approx(stats.stdev(data))


def test_stdev_scales_with_factor():
    data = [1.0, 4.0, 2.5, 9.0, -3.0]
    assert stats.stdev(stats.scale(data, -3.0)) == pytest.approx(3.0 * stats.stdev(data))


def test_cov_with_itself_is_variance():
    data = [0.3, 1.7, -2.2, 5.0, 0.9]
    assert stats.cov(data, data) == pytest.approx(stats.stdev(data) ** 2)


def test_cov_symmetric():
    x = [1.0, 2.0, 4.0, 8.0]
    y = [3.0, -1.0, 0.5, 2.0]
    assert stats.cov(x, y) == pytest.approx(stats.cov(y, x))


def test_cov_length_mismatch_raises():
    with pytest.raises(ValueError):
        stats.cov([1.0, 2.0], [1.0, 2.0, 3.0])


def test_cov_needs_two_points():
    with pytest.raises(ValueError):
        stats.cov([1.0], [2.0])


def test_corr_of_linear_relation():
    x = [0.1, 0.5, 2.0, 3.3, 7.0]
    assert stats.corr(x, [2 * v + 1 for v in x]) == pytest.approx(1.0)
    assert stats.corr(x, [-v for v in x]) == pytest.approx(-1.0)


def test_corr_bounded():
    x = [1.0, 3.0, 2.0, 5.0, 4.0]
    y = [2.0, 1.0, 4.0, 3.0, 6.0]
    assert -1.0 <= stats.corr(x, y) <= 1.0


def test_pnorm_at_zero():
    assert stats.pnorm(0.0) == pytest.approx(0.5)
    assert stats.pnorm_exact(0.0) == pytest.approx(0.5)


@pytest.mark.parametrize("x", [0.2, 0.8, 1.5, 2.3, 3.7])
def test_pnorm_symmetry(x):
    assert stats.pnorm(x) + stats.pnorm(-x) == pytest.approx(1.0)
    assert stats.pnorm_exact(x) + stats.pnorm_exact(-x) == pytest.approx(1.0)


@pytest.mark.parametrize("x", [-3.0, -1.2, -0.4, 0.4, 1.0, 2.5])
def test_pnorm_approximates_exact(x):
    assert stats.pnorm(x) == pytest.approx(stats.pnorm_exact(x), abs=1e-5)


def test_pnorm_monotone():
    points = [-4.0, -2.0, -1.0, 0.0, 1.0, 2.0, 4.0]
    values = [stats.pnorm(p) for p in points]
    assert values == sorted(values)


def test_pnorm_exact_known_quantile():
    assert stats.pnorm_exact(1.96) == pytest.approx(0.975, abs=1e-4)


def test_dot_with_ones_equals_total():
    v = [1.5, -2.0, 3.25]
    assert stats.dot(v, [1.0, 1.0, 1.0]) == pytest.approx(math.fsum(v))


def test_dot_orthogonal():
    assert stats.dot([1.0, 0.0], [0.0, 5.0]) == 0.0


def test_dot_length_mismatch_raises():
    with pytest.raises(ValueError):
        stats.dot([1.0], [1.0, 2.0])


def test_shift_round_trip():
    data = [1.0, -2.5, 7.25]
    assert list(stats.shift(stats.shift(data, 3.5), -3.5)) == pytest.approx(data)


def test_scale_round_trip():
    data = [1.0, -2.5, 7.25]
    assert list(stats.scale(stats.scale(data, 4.0), 0.25)) == pytest.approx(data)


def test_write_array_csv_format(tmp_path):
    path = tmp_path / "arr.csv"
    stats.write_array_csv([1.0, 0.5, -2.0], path)
    assert path.read_text() == "1,\n0.5,\n-2,\n"


def test_write_array_csv_round_trip(tmp_path):
    path = tmp_path / "arr.csv"
    data = [0.25, 3.0, -7.5, 12.0]
    stats.write_array_csv(data, path)
    read = [float(line.rstrip(",")) for line in path.read_text().splitlines()]
    assert read == data


def test_write_matrix_csv_transposes_columns(tmp_path):
    path = tmp_path / "mat.csv"
    stats.write_matrix_csv([[1.0, 2.0], [3.0, 4.0]], path)
    assert path.read_text() == "1,3,\n2,4,\n"


def test_write_matrix_csv_unequal_columns_raise(tmp_path):
    with pytest.raises(ValueError):
        stats.write_matrix_csv([[1.0, 2.0], [3.0]], tmp_path / "bad.csv")