"""Matrices of Brownian increments and simulated price paths."""

from __future__ import annotations

import math

import numpy as np


def cum_sum(matrix) -> np.ndarray:
    """Row-wise cumulative sums of a two-dimensional array."""
    arr = np.asarray(matrix, dtype=float)
    if arr.ndim != 2:
        raise ValueError("expected a two-dimensional array")
    return np.cumsum(arr, axis=1)


def wiener_increments(n_sim: int, n_steps: int, delta_t: float, seed: int) -> np.ndarray:
    """Antithetic Brownian increments, one simulation per row.

    Row ``half + i`` is the negation of row ``i``; with an odd number of
    simulations the last row is left at zero.
    """
    if n_sim < 0 or n_steps < 0:
        raise ValueError("dimensions must not be negative")
    if delta_t < 0:
        raise ValueError("time step must not be negative")
    rng = np.random.default_rng(seed)
    half = n_sim // 2
    z = rng.standard_normal((half, n_steps)) * math.sqrt(delta_t)
    mat = np.zeros((n_sim, n_steps))
    mat[:half] = z
    mat[half : 2 * half] = -z
    return mat


def gbm_price_paths(
    n_steps: int,
    n_sim: int,
    T: float,
    s0: float,
    r: float,
    sigma: float,
    seed: int = 12345678,
) -> np.ndarray:
    """Geometric Brownian motion paths; column 0 holds ``s0``.

    The step is ``T / n_steps`` and each row has ``n_steps`` columns.
    """
    if n_steps < 1:
        raise ValueError("at least one step is required")
    if n_sim < 0:
        raise ValueError("number of simulations must not be negative")
    rng = np.random.default_rng(seed)
    delta_t = T / n_steps
    z = rng.standard_normal((n_sim, n_steps - 1))
    log_steps = (r - 0.5 * sigma * sigma) * delta_t + sigma * math.sqrt(delta_t) * z
    log_paths = np.concatenate(
        (np.zeros((n_sim, 1)), np.cumsum(log_steps, axis=1)), axis=1
    )
    return s0 * np.exp(log_paths)