"""Simulation problems: stopping sums, Heston Asian option, barriers, bonds and jumps."""

from __future__ import annotations

import argparse
import math
from dataclasses import dataclass

import numpy as np

from compfin.paths import wiener_increments


@dataclass(frozen=True)
class BarrierResult:
    """Discounted payoff and the share of paths that hit the lower bound first."""

    price: float
    lower_probability: float


def question1(n_sim: int = 10000, seed: int = 12345678) -> float:
    """Mean of max(4.54 - N, 0), N the number of uniforms whose sum first reaches 1.1."""
    if n_sim < 1:
        raise ValueError("at least one simulation is required")
    rng = np.random.default_rng(seed)
    threshold = 1.1
    total = 0.0
    for _ in range(n_sim):
        running, count = 0.0, 0
        while running < threshold:
            running += rng.random()
            count += 1
        total += max(4.54 - count, 0.0)
    return total / n_sim


def heston_asian(v0, alpha, beta, gamma, s0, r, rho, T, n_steps, n_sim) -> float:
    """Discounted price of a call struck at the path average under a Heston-type model."""
    n_steps, n_sim = int(n_steps), int(n_sim)
    if n_steps < 1 or n_sim < 1:
        raise ValueError("steps and simulations must be positive")
    if not -1.0 <= rho <= 1.0:
        raise ValueError("correlation must lie in [-1, 1]")
    delta_t = T / n_steps
    dw = wiener_increments(n_sim, n_steps, delta_t, 123456)
    dw1 = wiener_increments(n_sim, n_steps, delta_t, 654321)
    db = rho * dw + math.sqrt(1.0 - rho * rho) * dw1

    s = np.full(n_sim, float(s0))
    v = np.full(n_sim, float(v0))
    path_sum = s.copy()
    for j in range(n_steps):
        vol = np.sqrt(np.maximum(v, 0.0))
        s_next = s + s * r * delta_t + vol * s * dw[:, j]
        v = v + (alpha + beta * np.maximum(v, 0.0)) * delta_t + gamma * vol * db[:, j]
        s = s_next
        path_sum += s
    average = path_sum / (n_steps + 1)
    payoff = np.maximum(s - average, 0.0)
    return float(payoff.mean() * math.exp(-r * T))


def question2() -> list[float]:
    """Heston Asian prices for correlations -0.75, 0 and 0.75."""
    return [
        heston_asian(0.06, 0.45, -5.105, 0.25, 20.0, 0.05, rho, 2.0, 100, 10000)
        for rho in (-0.75, 0.0, 0.75)
    ]


def barrier_question() -> BarrierResult:
    """Option paying a call above a rising upper bound or a put below a lower bound."""
    k, T, s0, r, sigma = 100.0, 5.0, 100.0, 0.05, 0.35
    n_points, n_sim = 101, 10000
    delta_t = T / 100.0
    rng = np.random.default_rng(12345678)
    half = n_sim // 2
    z = rng.standard_normal((half, n_points - 1))
    shocks = np.vstack((z, -z))
    log_steps = (r - 0.5 * sigma * sigma) * delta_t + sigma * math.sqrt(delta_t) * shocks
    prices = s0 * np.exp(
        np.concatenate((np.zeros((2 * half, 1)), np.cumsum(log_steps, axis=1)), axis=1)
    )

    times = np.arange(n_points) * delta_t
    lower = 50.0 * np.exp(0.138629 * times)
    upper = 200.0 - lower

    above = prices > upper
    below = prices < lower
    hit = above | below
    touched = hit.any(axis=1)
    first = np.argmax(hit, axis=1)
    rows = np.arange(len(prices))
    at_hit = prices[rows, first]
    up_first = above[rows, first]
    payoff = np.where(up_first, np.maximum(at_hit - k, 0.0), np.maximum(k - at_hit, 0.0))
    payoff = np.where(touched, payoff, 0.0)
    lower_first = touched & ~up_first
    return BarrierResult(
        price=float(payoff.sum() / n_sim * math.exp(-r * T)),
        lower_probability=float(np.count_nonzero(lower_first)) / n_sim,
    )


def bond_put_question() -> float:
    """Put on a zero-coupon bond under a mean-reverting short rate."""
    r0, alpha, beta, sigma, gamma = 0.05, 0.36, -5.86, 0.36, 2.0
    k, maturity, n_steps, n_sims, face = 9800.0, 1.0, 100, 10000, 10000.0
    delta_t = maturity / n_steps
    rng = np.random.default_rng(654321)
    z = rng.standard_normal((n_sims, n_steps - 1))
    rates = np.empty((n_sims, n_steps))
    rates[:, 0] = r0
    for j in range(1, n_steps):
        prev = rates[:, j - 1]
        rates[:, j] = (
            prev + (alpha + beta * prev) * delta_t + sigma * prev**gamma * z[:, j - 1] * delta_t
        )
    expiry = n_steps // 2
    to_expiry = rates[:, :expiry].sum(axis=1) * delta_t
    to_maturity = rates[:, expiry:].sum(axis=1) * delta_t
    bond = face * np.exp(-to_maturity)
    payoff = np.maximum(k - bond, 0.0) * np.exp(-to_expiry)
    return float(payoff.mean())


def jump_quanto_question() -> float:
    """Call on an index with jumps, converted at a stochastic exchange rate."""
    s0, rho, r, q, rf = 6000.0, -0.25, 0.05, 0.0, 0.04
    sigma1, sigma2, gamma, lam = 0.1, 0.15, -0.04, 1.5
    k, T, e0 = 60.0, 1.0, 0.0096
    n_sim, n_steps = 10000, 100
    delta_t = T / n_steps

    dw = wiener_increments(n_sim, n_steps, delta_t, 123456)
    dw1 = wiener_increments(n_sim, n_steps, delta_t, 654321)
    db = rho * dw + math.sqrt(1.0 - rho * rho) * dw1
    jumps = np.random.default_rng(12345678).poisson(lam * delta_t, (n_sim, n_steps))

    s = np.full(n_sim, s0)
    e = np.full(n_sim, e0)
    for j in range(n_steps):
        s = s + s * ((r - q) * delta_t + sigma1 * dw[:, j] + gamma * jumps[:, j])
        e = e + e * delta_t * (r - rf) + sigma2 * e * db[:, j]
    payoff = np.maximum(s * e - k, 0.0)
    return float(payoff.mean() * math.exp(-r * T))


def main(argv: list[str] | None = None) -> int:
    """Run every question and print the results."""
    parser = argparse.ArgumentParser(description="Final simulation problems.")
    parser.parse_args(argv)

    print("Running Qn 1")
    print(f"{question1():g}")
    print("Running Qn 2")
    for price in question2():
        print(f"{price:g}")
    print("Running Qn 3")
    barrier = barrier_question()
    print(f"pay off: {barrier.price:g}")
    print(f"conditional probability: {barrier.lower_probability:g}")
    print("Running Qn 4")
    print(f"{bond_put_question():g}")
    print("Running Qn 5")
    print(f"Pay off is: {jump_quanto_question():g}")
    return 0