"""Descriptive statistics, normal CDFs and small array helpers."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from os import PathLike
from pathlib import Path

import numpy as np

_PNORM_COEFFS = (
    0.0498673470,
    0.0211410061,
    0.0032776263,
    0.0000380036,
    0.0000488906,
    0.0000053830,
)


def _as_floats(values: Iterable[float]) -> list[float]:
    return [float(v) for v in values]


def _paired(x: Iterable[float], y: Iterable[float]) -> tuple[list[float], list[float]]:
    xs, ys = _as_floats(x), _as_floats(y)
    if len(xs) != len(ys):
        raise ValueError(f"length mismatch: {len(xs)} and {len(ys)}")
    if len(xs) < 2:
        raise ValueError("at least two observations are required")
    return xs, ys


def mean(values: Iterable[float]) -> float:
    """Arithmetic mean of the values."""
    data = _as_floats(values)
    if not data:
        raise ValueError("mean of an empty sequence")
    return sum(data) / len(data)


def stdev(values: Iterable[float]) -> float:
    """Sample standard deviation with Bessel's correction.

    A single observation is divided by one rather than zero, giving 0.
    """
    data = _as_floats(values)
    centre = mean(data)
    n = len(data)
    variance = sum((v - centre) ** 2 for v in data)
    variance /= n - (0 if n == 1 else 1)
    return math.sqrt(variance)


def cov(x: Iterable[float], y: Iterable[float]) -> float:
    """Sample covariance of two equally long series."""
    xs, ys = _paired(x, y)
    mx, my = mean(xs), mean(ys)
    sse = sum((a - mx) * (b - my) for a, b in zip(xs, ys))
    return sse / (len(xs) - 1)


def corr(x: Iterable[float], y: Iterable[float]) -> float:
    """Pearson correlation of two equally long series."""
    xs, ys = _paired(x, y)
    n = len(xs)
    mx, my = mean(xs), mean(ys)
    numerator = sum((a - mx) * (b - my) for a, b in zip(xs, ys)) / (n - 1)
    sd_x = math.sqrt(sum((a - mx) ** 2 for a in xs) / (n - 1))
    sd_y = math.sqrt(sum((b - my) ** 2 for b in ys) / (n - 1))
    return numerator / (sd_y * sd_x)


def pnorm(x: float) -> float:
    """Standard normal CDF by a sixth-order polynomial approximation."""
    abs_x = abs(x)
    temp = 1.0 + sum(d * abs_x ** (k + 1) for k, d in enumerate(_PNORM_COEFFS))
    probability = 1.0 - 0.5 * temp ** -16
    return probability if x >= 0 else 1.0 - probability


def pnorm_exact(x: float) -> float:
    """Standard normal CDF computed through the complementary error function."""
    return math.erfc(-x / math.sqrt(2.0)) / 2.0


def dot(v1: Iterable[float], v2: Iterable[float]) -> float:
    """Sum of element-wise products of two equally long vectors."""
    a, b = _as_floats(v1), _as_floats(v2)
    if len(a) != len(b):
        raise ValueError(f"length mismatch: {len(a)} and {len(b)}")
    return sum(p * q for p, q in zip(a, b))


def scale(values: Iterable[float], factor: float) -> np.ndarray:
    """Return the values multiplied by ``factor``."""
    return np.asarray(list(values), dtype=float) * factor


def shift(values: Iterable[float], amount: float) -> np.ndarray:
    """Return the values with ``amount`` added to each."""
    return np.asarray(list(values), dtype=float) + amount


def _fmt(value: float) -> str:
    return format(float(value), "g")


def write_array_csv(values: Iterable[float], path: str | PathLike[str]) -> None:
    """Write one value per line, each followed by a comma."""
    with Path(path).open("w", encoding="utf-8") as fh:
        fh.writelines(f"{_fmt(v)},\n" for v in values)


def write_matrix_csv(
    columns: Sequence[Sequence[float]], path: str | PathLike[str]
) -> None:
    """Write column-major data as rows, every cell followed by a comma."""
    cols = [_as_floats(c) for c in columns]
    lengths = {len(c) for c in cols}
    if len(lengths) > 1:
        raise ValueError("all columns must have the same length")
    with Path(path).open("w", encoding="utf-8") as fh:
        for row in zip(*cols):
            fh.write("".join(f"{_fmt(v)}," for v in row) + "\n")