"""Option prices by simulation, closed form, lattices and low-discrepancy sampling."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from enum import Enum

import numpy as np

from compfin.generators import box_muller_halton, halton_sequence, wiener_process
from compfin.stats import mean, pnorm, scale


class BinomialMethod(str, Enum):
    """Ways of choosing the up/down factors and probabilities of a binomial tree."""

    A = "a"
    B = "b"
    C = "c"
    D = "d"


class TrinomialMethod(str, Enum):
    """Ways of building a trinomial tree: on prices (A) or on log prices (B)."""

    A = "a"
    B = "b"


def _check_lattice(S: float, K: float, sigma: float, t: float, steps: int) -> None:
    if steps < 1:
        raise ValueError("at least one step is required")
    if S <= 0 or K <= 0:
        raise ValueError("spot and strike must be positive")
    if sigma <= 0:
        raise ValueError("volatility must be positive")
    if t < 0:
        raise ValueError("time to maturity must not be negative")


def call_price_simulation(
    w_t: Iterable[float], r: float, sigma: float, T: float, s0: float, x: float
) -> np.ndarray:
    """Discounted call payoffs, one per terminal value of the Wiener process."""
    w = np.asarray(w_t if isinstance(w_t, np.ndarray) else list(w_t), dtype=float)
    terminal = s0 * np.exp((r - 0.5 * sigma * sigma) * T + sigma * w)
    return np.maximum(terminal - x, 0.0) / math.exp(r * T)


def _d1_d2(r: float, sigma: float, T: float, s0: float, x: float) -> tuple[float, float]:
    if s0 <= 0 or x <= 0:
        raise ValueError("spot and strike must be positive")
    if sigma <= 0:
        raise ValueError("volatility must be positive")
    if T < 0:
        raise ValueError("time to maturity must not be negative")
    root_t = math.sqrt(T)
    d1 = (math.log(s0 / x) + (r + 0.5 * sigma * sigma) * T) / (sigma * root_t)
    return d1, d1 - sigma * root_t


def call_price_bs(
    r: float,
    sigma: float,
    T: float,
    s0: float,
    x: float,
    cdf: Callable[[float], float] = pnorm,
) -> float:
    """Black-Scholes price of a European call; at expiry the intrinsic value."""
    if T == 0:
        _d1_d2(r, sigma, 1.0, s0, x)
        return max(s0 - x, 0.0)
    d1, d2 = _d1_d2(r, sigma, T, s0, x)
    return s0 * cdf(d1) - x * cdf(d2) / math.exp(r * T)


def put_price_bs(
    r: float,
    sigma: float,
    T: float,
    s0: float,
    x: float,
    cdf: Callable[[float], float] = pnorm,
) -> float:
    """Black-Scholes price of a European put; at expiry the intrinsic value."""
    if T == 0:
        _d1_d2(r, sigma, 1.0, s0, x)
        return max(x - s0, 0.0)
    d1, d2 = _d1_d2(r, sigma, T, s0, x)
    return x * cdf(-d2) / math.exp(r * T) - s0 * cdf(-d1)


def call_antithetic(
    seed: int, size: int, r: float, sigma: float, T: float, s0: float, x: float
) -> float:
    """Monte Carlo call price averaging each path with its mirror image."""
    w_t = wiener_process(T, size, seed)
    direct = call_price_simulation(w_t, r, sigma, T, s0, x)
    mirrored = call_price_simulation(-w_t, r, sigma, T, s0, x)
    return mean(0.5 * (direct + mirrored))


def _binomial_factors(
    method: BinomialMethod | str, r: float, sigma: float, delta: float
) -> tuple[float, float, float]:
    method = BinomialMethod(method)
    if method is BinomialMethod.A:
        c = 0.5 * (math.exp(-r * delta) + math.exp((r + sigma * sigma) * delta))
        d = c - math.sqrt(c * c - 1.0)
        u = 1.0 / d
        p_up = (math.exp(r * delta) - d) / (u - d)
    elif method is BinomialMethod.B:
        spread = math.sqrt(math.exp(sigma * sigma * delta) - 1.0)
        u = math.exp(r * delta) * (1.0 + spread)
        d = math.exp(r * delta) * (1.0 - spread)
        p_up = 0.5
    elif method is BinomialMethod.C:
        drift = (r - 0.5 * sigma * sigma) * delta
        u = math.exp(drift + sigma * math.sqrt(delta))
        d = math.exp(drift - sigma * math.sqrt(delta))
        p_up = 0.5
    else:
        u = math.exp(sigma * math.sqrt(delta))
        d = math.exp(-sigma * math.sqrt(delta))
        p_up = 0.5 + 0.5 * ((r - 0.5 * sigma * sigma) * math.sqrt(delta) / sigma)
    return u, d, p_up


def _level_prices(S: float, u: float, d: float, level: int) -> np.ndarray:
    ups = np.arange(level + 1)
    return S * u**ups * d ** (level - ups)


def _binomial_european(
    method: BinomialMethod | str,
    S: float,
    K: float,
    r: float,
    sigma: float,
    t: float,
    steps: int,
    payoff: Callable[[np.ndarray], np.ndarray],
) -> float:
    _check_lattice(S, K, sigma, t, steps)
    delta = t / steps
    u, d, p_up = _binomial_factors(method, r, sigma, delta)
    p_down = 1.0 - p_up
    discount = math.exp(r * delta)
    values = payoff(_level_prices(S, u, d, steps))
    for _ in range(steps):
        values = (p_down * values[:-1] + p_up * values[1:]) / discount
    return float(values[0])


def call_european_binomial(
    method: BinomialMethod | str,
    S: float,
    K: float,
    r: float,
    sigma: float,
    t: float,
    steps: int,
) -> float:
    """European call on a recombining binomial tree."""
    return _binomial_european(
        method, S, K, r, sigma, t, steps, lambda p: np.maximum(p - K, 0.0)
    )


def put_european_binomial(
    method: BinomialMethod | str,
    S: float,
    K: float,
    r: float,
    sigma: float,
    t: float,
    steps: int,
) -> float:
    """European put on a recombining binomial tree."""
    return _binomial_european(
        method, S, K, r, sigma, t, steps, lambda p: np.maximum(K - p, 0.0)
    )


def put_american_binomial(
    method: BinomialMethod | str,
    S: float,
    K: float,
    r: float,
    sigma: float,
    t: float,
    steps: int,
) -> float:
    """American put on a binomial tree.

    At each node the larger of the undiscounted continuation value and the
    exercise value is taken, and that maximum is discounted one step.
    """
    _check_lattice(S, K, sigma, t, steps)
    delta = t / steps
    u, d, p_up = _binomial_factors(method, r, sigma, delta)
    p_down = 1.0 - p_up
    discount = math.exp(r * delta)
    values = np.maximum(K - _level_prices(S, u, d, steps), 0.0)
    for level in range(steps - 1, -1, -1):
        continuation = p_down * values[:-1] + p_up * values[1:]
        exercise = np.maximum(K - _level_prices(S, u, d, level), 0.0)
        values = np.maximum(continuation, exercise) / discount
    return float(values[0])


def call_european_trinomial(
    method: TrinomialMethod | str,
    S: float,
    K: float,
    r: float,
    sigma: float,
    t: float,
    steps: int,
) -> float:
    """European call on a recombining trinomial tree."""
    method = TrinomialMethod(method)
    _check_lattice(S, K, sigma, t, steps)
    delta = t / steps
    discount = math.exp(r * delta)
    rd = r * delta
    var = sigma * sigma * delta
    # node order runs from the highest price (k = steps) to the lowest (k = -steps)
    k = np.arange(steps, -steps - 1, -1)
    ups, downs = np.maximum(k, 0), np.maximum(-k, 0)
    if method is TrinomialMethod.A:
        d = math.exp(-sigma * math.sqrt(3.0 * delta))
        u = 1.0 / d
        p_down = (rd * (1.0 - u) + rd * rd + var) / ((u - d) * (1.0 - d))
        p_up = (rd * (1.0 - d) + rd * rd + var) / ((u - d) * (u - 1.0))
        terminal = S * u**ups * d**downs
    else:
        dx = sigma * math.sqrt(3.0 * delta)
        nu = r - 0.5 * sigma * sigma
        second = var + nu * nu * delta * delta
        first = nu * delta
        p_down = 0.5 * (second / (dx * dx) - first / dx)
        p_up = 0.5 * (second / (dx * dx) + first / dx)
        terminal = np.exp(math.log(S) + dx * ups - dx * downs)
    p_mid = 1.0 - p_down - p_up
    values = np.maximum(terminal - K, 0.0)
    for _ in range(steps):
        values = (p_up * values[:-2] + p_mid * values[1:-1] + p_down * values[2:]) / discount
    return float(values[0])


def call_european_lds(
    S: float,
    K: float,
    r: float,
    sigma: float,
    T: float,
    N: int,
    base1: int,
    base2: int,
) -> float:
    """European call priced from normals built on two Halton sequences."""
    if N < 1:
        raise ValueError("at least one point is required")
    normals = box_muller_halton(halton_sequence(base1, N), halton_sequence(base2, N))
    payoffs = call_price_simulation(scale(normals, math.sqrt(T)), r, sigma, T, S, K)
    return mean(payoffs)