"""Uniform, binomial, exponential and normal variates and Halton sequences."""

from __future__ import annotations

import math
from collections.abc import Iterable

import numpy as np

from compfin.stats import scale

LGM_MULTIPLIER = 7**5
LGM_MODULUS = 2**31 - 1
_WORD_MASK = 2**32 - 1


def _vector(values: Iterable[float]) -> np.ndarray:
    data = values if isinstance(values, np.ndarray) else list(values)
    arr = np.asarray(data, dtype=float)
    if arr.ndim != 1:
        raise ValueError("expected a one-dimensional sequence")
    return arr


def lgm_next(num: int, m: int = LGM_MODULUS) -> int:
    """Next state of the multiplicative congruential generator.

    The product ``7**5 * num`` is taken modulo ``2**32`` before the
    reduction modulo ``m``.
    """
    if not 0 <= num <= _WORD_MASK:
        raise ValueError(f"state {num} is outside the 32-bit unsigned range")
    if m <= 0:
        raise ValueError("modulus must be positive")
    return ((LGM_MULTIPLIER * num) & _WORD_MASK) % m


def runif(size: int, seed: int) -> np.ndarray:
    """``size`` uniforms on [0, 1) from the congruential generator.

    The first value is the seed itself scaled by the modulus.
    """
    if size < 0:
        raise ValueError("size must not be negative")
    if not 0 <= seed <= LGM_MODULUS:
        raise ValueError(f"seed must lie in [0, {LGM_MODULUS}]")
    states = []
    state = seed
    for _ in range(size):
        states.append(state)
        state = lgm_next(state)
    return np.asarray(states, dtype=float) / LGM_MODULUS


def rbinom(size: int, n: int, p: float, seed: int) -> np.ndarray:
    """Binomial(n, p) draws, each the count of ``n`` uniforms not above ``p``."""
    if size < 0 or n < 0:
        raise ValueError("size and n must not be negative")
    uniforms = runif(size * n, seed).reshape(size, n)
    return np.count_nonzero(uniforms <= p, axis=1)


def rexp(uniforms: Iterable[float], lam: float = 1.5) -> np.ndarray:
    """Exponential variates ``-lam * log(u)`` with mean ``lam``."""
    u = _vector(uniforms)
    with np.errstate(divide="ignore"):
        return -lam * np.log(u)


def box_muller(uniforms: Iterable[float]) -> np.ndarray:
    """Standard normals from consecutive pairs of uniforms."""
    u = _vector(uniforms)
    if len(u) % 2:
        raise ValueError("Box-Muller needs an even number of uniforms")
    u1, u2 = u[0::2], u[1::2]
    with np.errstate(divide="ignore"):
        radius = np.sqrt(-2.0 * np.log(u1))
    out = np.empty_like(u)
    out[0::2] = radius * np.cos(2.0 * math.pi * u2)
    out[1::2] = radius * np.sin(2.0 * math.pi * u2)
    return out


def box_muller_halton(base1: Iterable[float], base2: Iterable[float]) -> np.ndarray:
    """Standard normals from two low-discrepancy sequences.

    Even positions use the cosine branch and odd positions the sine
    branch, each on the values at that same position.
    """
    b1, b2 = _vector(base1), _vector(base2)
    if len(b1) != len(b2):
        raise ValueError(f"length mismatch: {len(b1)} and {len(b2)}")
    with np.errstate(divide="ignore"):
        radius = np.sqrt(-2.0 * np.log(b1))
    angle = 2.0 * math.pi * b2
    out = radius * np.cos(angle)
    out[1::2] = radius[1::2] * np.sin(angle[1::2])
    return out


def polar_marsaglia(uniforms: Iterable[float], overlapping: bool = False) -> np.ndarray:
    """Standard normals by the polar rejection method.

    By default the uniforms are taken in disjoint pairs. With
    ``overlapping`` the pairs ``(u[i], u[i + 1])`` for ``i`` below half
    the length are used instead. Only accepted pairs contribute.
    """
    u = _vector(uniforms)
    if overlapping:
        half = len(u) // 2
        first, second = u[:half], u[1 : half + 1]
    else:
        if len(u) % 2:
            raise ValueError("disjoint pairs need an even number of uniforms")
        first, second = u[0::2], u[1::2]
    v1 = 2.0 * first - 1.0
    v2 = 2.0 * second - 1.0
    w = v1 * v1 + v2 * v2
    accepted = w <= 1.0
    v1, v2, w = v1[accepted], v2[accepted], w[accepted]
    with np.errstate(divide="ignore", invalid="ignore"):
        factor = np.sqrt(-2.0 * np.log(w) / w)
    return np.column_stack((v1 * factor, v2 * factor)).ravel()


def bivariate_normal_x(z1: Iterable[float]) -> np.ndarray:
    """First component of a standard bivariate normal pair."""
    return _vector(z1).copy()


def bivariate_normal_y(
    z1: Iterable[float], z2: Iterable[float], rho: float
) -> np.ndarray:
    """Second component, correlated with ``z1`` by ``rho``."""
    a, b = _vector(z1), _vector(z2)
    if len(a) != len(b):
        raise ValueError(f"length mismatch: {len(a)} and {len(b)}")
    if not -1.0 <= rho <= 1.0:
        raise ValueError("correlation must lie in [-1, 1]")
    return rho * a + math.sqrt(1.0 - rho * rho) * b


def wiener_process(t: float, size: int, seed: int) -> np.ndarray:
    """``size`` independent draws of W(t)."""
    if t < 0:
        raise ValueError("time must not be negative")
    return scale(box_muller(runif(size, seed)), math.sqrt(t))


def _radical_inverse(index: int, base: int) -> float:
    value = 0.0
    position = 1
    while index > 0:
        index, digit = divmod(index, base)
        value += digit * base ** -position
        position += 1
    return value


def halton_sequence(base: int, size: int) -> np.ndarray:
    """First ``size`` points of the Halton sequence in ``base``, from index 1."""
    if base < 2:
        raise ValueError("base must be at least 2")
    if size < 0:
        raise ValueError("size must not be negative")
    return np.asarray(
        [_radical_inverse(i, base) for i in range(1, size + 1)], dtype=float
    )