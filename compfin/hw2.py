"""Correlated normals, variance reduction, option prices and integral estimates."""

from __future__ import annotations

import argparse
import math
from collections.abc import Iterable
from dataclasses import dataclass
from os import PathLike
from pathlib import Path

import numpy as np

from compfin.generators import (
    bivariate_normal_x,
    bivariate_normal_y,
    box_muller,
    runif,
    wiener_process,
)
from compfin.pricing import call_antithetic, call_price_bs, call_price_simulation
from compfin.stats import corr, cov, mean, pnorm_exact, stdev, write_array_csv, write_matrix_csv

SEED = 1234567890
_ACCEPT_BOUND = 1.53


@dataclass(frozen=True)
class Summary:
    """Sample mean and standard deviation."""

    mean: float
    stdev: float


@dataclass(frozen=True)
class ControlVariateResult:
    """Estimates before and after applying a control variate."""

    before: Summary
    after: Summary


@dataclass(frozen=True)
class CallPrices:
    """Call prices from plain simulation, Black-Scholes and antithetic simulation."""

    monte_carlo: float
    black_scholes: float
    antithetic: float


@dataclass(frozen=True)
class Estimate:
    """A Monte Carlo estimate and the standard deviation that goes with it."""

    value: float
    stdev: float


def _vector(values: Iterable[float]) -> np.ndarray:
    return np.asarray(values if isinstance(values, np.ndarray) else list(values), dtype=float)


def _summarise(values: Iterable[float]) -> Summary:
    data = list(values)
    return Summary(mean(data), stdev(data))


def derivative_value(x: float) -> float:
    """The quarter-circle integrand sqrt(1 - x^2)."""
    return math.sqrt(1.0 - x * x)


def t_x(x: float) -> float:
    """Importance-sampling density on [0, 1]."""
    return (1.0 - 0.74 * x * x) / (1.0 - 0.74 / 3.0)


def correlation_question(z1: Iterable[float], z2: Iterable[float], rho: float) -> float:
    """Sample correlation of a bivariate normal built with correlation ``rho``."""
    x = bivariate_normal_x(z1)
    y = bivariate_normal_y(z1, z2, rho)
    return corr(x, y)


def expectation_question(z1: Iterable[float], z2: Iterable[float], rho: float) -> float:
    """Estimate of E[max(0, X^3 + sin Y + X^2 Y)]."""
    x = bivariate_normal_x(z1)
    y = bivariate_normal_y(z1, z2, rho)
    return mean(np.maximum(0.0, x**3 + np.sin(y) + x * x * y))


def _reduce(x: np.ndarray, y: np.ndarray, target: float) -> ControlVariateResult:
    gamma = cov(x, y) / cov(y, y)
    adjusted = x - gamma * (y - target)
    return ControlVariateResult(_summarise(x), _summarise(adjusted))


def control_variate(w_t: Iterable[float], t: float) -> ControlVariateResult:
    """Estimate E[exp(t/2) cos W_t] with W_t^2 as control variate."""
    w = _vector(w_t)
    return _reduce(np.cos(w) * math.exp(t / 2.0), w * w, t)


def question3(seed: int) -> list[ControlVariateResult]:
    """E[W_5^2 + sin W_5] and E[exp(t/2) cos W_t] for t = 0.5, 3.2, 6.5."""
    t, delta = 5.0, 0.001
    w = wiener_process(t, round(t / delta), seed)
    results = [_reduce(w * w + np.sin(w), w * w, t)]
    for t, delta, offset in ((0.5, 0.001, 1), (3.2, 0.001, 10), (6.5, 0.0001, 20)):
        w = wiener_process(t, round(t / delta), seed + offset)
        results.append(control_variate(w, t))
    return results


def question4(seed: int) -> CallPrices:
    """Price one call by simulation, closed form and antithetic simulation."""
    r, sigma, s0, T, size, x = 0.04, 0.2, 88.0, 5.0, 10000, 100.0
    w_t = wiener_process(T, size, seed)
    return CallPrices(
        monte_carlo=mean(call_price_simulation(w_t, r, sigma, T, s0, x)),
        black_scholes=call_price_bs(r, sigma, T, s0, x, cdf=pnorm_exact),
        antithetic=call_antithetic(seed, size, r, sigma, T, s0, x),
    )


def expected_stock_prices(seed: int, sigma: float, r: float, s0: float) -> np.ndarray:
    """S_0 followed by simulated E[S_n] for n = 1..10."""
    values = [s0]
    for t in range(1, 11):
        w = wiener_process(t, 10000, seed)
        values.append(mean(s0 * np.exp(sigma * w + (r - 0.5 * sigma * sigma) * t)))
    return np.asarray(values, dtype=float)


def stock_paths(seed: int, sigma: float, s0: float, r: float) -> np.ndarray:
    """Six price paths over ten years in 1000 steps, 1001 points each."""
    rows, steps = 6, 1000
    delta = 10.0 / steps
    normals = box_muller(runif(rows * (steps + 1), seed))[: rows * steps].reshape(rows, steps)
    log_steps = sigma * normals * math.sqrt(delta) + r * delta
    log_paths = np.concatenate((np.zeros((rows, 1)), np.cumsum(log_steps, axis=1)), axis=1)
    return s0 * np.exp(log_paths)


def write_stock_paths(
    seed: int, sigma: float, s0: float, r: float, path: str | PathLike[str]
) -> np.ndarray:
    """Write the paths of :func:`stock_paths` one per line and return them."""
    paths = stock_paths(seed, sigma, s0, r)
    write_matrix_csv(paths.T, path)
    return paths


def euler_integral() -> float:
    """Four times the Euler-method integral of sqrt(1 - x^2) over [0, 1]."""
    h = 0.001
    x, y = 0.0, 1.0
    for _ in range(1000):
        y += h * derivative_value(x)
        x += h
    return (y - 1.0) * 4.0


def monte_carlo_integral(seed: int) -> Estimate:
    """Plain Monte Carlo estimate of pi from the quarter circle."""
    u = runif(10000, seed)
    g = np.sqrt(1.0 - u * u)
    return Estimate(mean(g) * 4.0, stdev(g) * 4.0)


def importance_sampling(seed: int) -> Estimate:
    """Estimate of pi by acceptance-rejection draws from :func:`t_x`."""
    size = 10000
    candidates = runif(size, seed + 100)
    uniforms = runif(size, seed + 1000)
    ratios = [
        derivative_value(u) / t_x(u)
        for y, u in zip(candidates, uniforms)
        if u <= t_x(y) / _ACCEPT_BOUND
    ]
    if not ratios:
        raise ValueError("no sample was accepted")
    return Estimate(mean(ratios) * 4.0, stdev(ratios))


def _banner(label: str) -> None:
    print(f"#################################### {label} ###################################")


def _print_control(label: str, result: ControlVariateResult) -> None:
    print(f"{label} mean before variance reduction: {result.before.mean:g}")
    print(f"{label} sd before variance reduction: {result.before.stdev:g}")
    print(f"{label} mean after variance reduction: {result.after.mean:g}")
    print(f"{label} sd after variance reduction: {result.after.stdev:g}")


def main(argv: list[str] | None = None) -> int:
    """Run every question and print the results."""
    parser = argparse.ArgumentParser(description="Monte Carlo simulation exercises.")
    parser.add_argument("--out-dir", type=Path, default=None, help="directory for CSV output")
    args = parser.parse_args(argv)
    out_dir: Path | None = args.out_dir
    if out_dir is not None:
        out_dir.mkdir(parents=True, exist_ok=True)

    size = 1000
    r, sigma, s0 = 0.04, 0.18, 88.0
    normals = box_muller(runif(size * 2, SEED))
    z1, z2 = normals[:size], normals[size:]

    _banner("Qn 1")
    print(f"value of RHO using simulation is: {correlation_question(z1, z2, -0.7):g}")
    _banner("Qn 2")
    print(f"Expected Value is : {expectation_question(z1, z2, 0.6):g}")

    _banner("Qn 3")
    for order, result in enumerate(question3(SEED), start=1):
        _print_control(f"Ea{order}", result)

    _banner("Qn 4")
    prices = question4(SEED)
    print(f"Call Option Price is: {prices.monte_carlo:g}")
    print(f"Call Option Price Computed by Black Scholes formula: {prices.black_scholes:g}")
    print(f"Call Option Price Using Antithetic Variables is: {prices.antithetic:g}")

    _banner("Qn 5")
    low = expected_stock_prices(SEED, sigma, r, s0)
    high = expected_stock_prices(SEED, 0.35, r, s0)
    print("E[S_n]: " + ", ".join(f"{v:g}" for v in low))
    print("E[S_n] with sigma 0.35: " + ", ".join(f"{v:g}" for v in high))
    if out_dir is not None:
        write_array_csv(low, out_dir / "Q5a1.csv")
        write_stock_paths(SEED, sigma, s0, r, out_dir / "Q5b1.csv")
        write_stock_paths(SEED, 0.35, s0, r, out_dir / "Q5dhigsigma.csv")
        write_array_csv(high, out_dir / "Q5dESN.csv")

    _banner("Qn 6")
    print(f"Euler method to get the integral, value is: {euler_integral():g}")
    plain = monte_carlo_integral(1234)
    print(f"Monte Carlo Approx is: {plain.value:g}")
    print(f"Monte Carlo Approx Standard Deviation is : {plain.stdev:g}")
    weighted = importance_sampling(SEED)
    print(f"Monte Carlo Using Importance Sampling Method: {weighted.value:g}")
    print(f"Monte Carlo Using Importance Sampling Method Deviation: {weighted.stdev:g}")
    return 0