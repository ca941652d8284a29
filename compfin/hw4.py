"""Lattice pricing exercises: binomial and trinomial trees, Greeks and Halton pricing."""

from __future__ import annotations

import argparse
import math
from dataclasses import dataclass
from os import PathLike
from pathlib import Path

import numpy as np

from compfin.pricing import (
    BinomialMethod,
    TrinomialMethod,
    call_european_binomial,
    call_european_lds,
    call_european_trinomial,
    call_price_bs,
    put_american_binomial,
    put_european_binomial,
)
from compfin.stats import stdev, write_array_csv, write_matrix_csv

CONVERGENCE_STEPS = (10, 20, 40, 80, 100, 200, 500)
TRINOMIAL_STEPS = (10, 15, 20, 40, 70, 80, 100, 200, 500)
EPSILON = 0.01
GREEK_STEPS = 200

# Contract used in the convergence, trinomial and Halton exercises.
_R, _SIGMA, _S0, _K, _T = 0.05, 0.24, 32.0, 30.0, 0.5


@dataclass(frozen=True)
class Convergence:
    """Black-Scholes price and binomial prices per method and step count."""

    black_scholes: float
    steps: tuple[int, ...]
    prices: dict[BinomialMethod, list[float]]


@dataclass(frozen=True)
class GoogPrices:
    """Estimated volatility and call prices for the long-dated option."""

    sigma: float
    strike: float
    price: float
    price_low_vol: float


@dataclass(frozen=True)
class GreekTable:
    """Finite-difference Greeks, one entry per spot price."""

    delta: np.ndarray
    theta: np.ndarray
    gamma: np.ndarray
    vega: np.ndarray
    rho: np.ndarray

    def columns(self) -> list[np.ndarray]:
        """Columns in the order delta, theta, gamma, vega, rho."""
        return [self.delta, self.theta, self.gamma, self.vega, self.rho]


@dataclass(frozen=True)
class Greeks:
    """Greeks from the binomial tree and from the Black-Scholes formula."""

    spots: np.ndarray
    binomial: GreekTable
    black_scholes: GreekTable


@dataclass(frozen=True)
class DeltaPath:
    """Delta of the call as time to maturity grows."""

    times: np.ndarray
    binomial: np.ndarray
    black_scholes: np.ndarray


@dataclass(frozen=True)
class PutPrices:
    """European and American put prices across spot prices."""

    spots: np.ndarray
    european: np.ndarray
    american: np.ndarray


@dataclass(frozen=True)
class TrinomialPrices:
    """Trinomial call prices on prices (A) and on log prices (B)."""

    black_scholes: float
    steps: tuple[int, ...]
    method_a: np.ndarray
    method_b: np.ndarray


@dataclass(frozen=True)
class HaltonPrice:
    """Call price from Halton points and the Black-Scholes reference."""

    halton: float
    black_scholes: float


def binomial_convergence() -> Convergence:
    """Binomial call prices for every method as the number of steps grows."""
    prices = {
        method: [
            call_european_binomial(method, _S0, _K, _R, _SIGMA, _T, n)
            for n in CONVERGENCE_STEPS
        ]
        for method in BinomialMethod
    }
    return Convergence(call_price_bs(_R, _SIGMA, _T, _S0, _K), CONVERGENCE_STEPS, prices)


def _read_returns(path: str | PathLike[str]) -> list[float]:
    values = []
    with Path(path).open(encoding="utf-8") as fh:
        for line in fh:
            text = line.strip()
            if text:
                values.append(float(text.split(",")[0]))
    return values


def goog_prices(returns_path: str | PathLike[str]) -> GoogPrices:
    """Annualised volatility from monthly returns and the resulting call prices."""
    returns = _read_returns(returns_path)
    if len(returns) < 2:
        raise ValueError("at least two returns are required")
    rf, price = 0.02, 1141.42
    strike = (int(price) // 10) * 10.0 * 1.1
    sigma = stdev(returns) * math.sqrt(12)
    return GoogPrices(
        sigma=sigma,
        strike=strike,
        price=call_european_binomial("b", price, strike, rf, sigma, 0.968, 200),
        price_low_vol=call_european_binomial("b", price, strike, rf, 0.204, 1.0, 200),
    )


def greeks_table() -> Greeks:
    """Greeks of a call for spots 20, 22, ..., 80 by tree and by formula."""
    k, r, sigma, t = 50.0, 0.03, 0.2, 0.3846
    eps, eps2 = EPSILON, EPSILON * EPSILON
    spots = 20.0 + 2.0 * np.arange(31)

    def tree(s: float, tt: float = t, rr: float = r, ss: float = sigma) -> float:
        return call_european_binomial("d", s, k, rr, ss, tt, GREEK_STEPS)

    def bs(s: float, tt: float = t, rr: float = r, ss: float = sigma) -> float:
        return call_price_bs(rr, ss, tt, s, k)

    def row(price_fn, s: float) -> tuple[float, ...]:
        base = price_fn(s)
        return (
            (price_fn(s + eps) - base) / eps,
            (price_fn(s, tt=t + eps) - base) / eps,
            price_fn(s + 2.0) - 2.0 * price_fn(s + 1.0) + base,
            (price_fn(s, ss=sigma + eps2) - base) / eps2,
            (price_fn(s, rr=r + eps2) - base) / eps2,
        )

    def table(rows: list[tuple[float, ...]]) -> GreekTable:
        return GreekTable(*np.asarray(rows, dtype=float).T)

    return Greeks(
        spots=spots,
        binomial=table([row(tree, float(s)) for s in spots]),
        black_scholes=table([row(bs, float(s)) for s in spots]),
    )


def delta_over_time() -> DeltaPath:
    """Delta at spot 49 for maturities 0, 0.01, ... and finally 0.3846."""
    s0, k, r, sigma, t_end = 49.0, 50.0, 0.03, 0.2, 0.3846
    iterations = int(t_end / EPSILON)
    times = [i * EPSILON for i in range(iterations + 1)] + [t_end]
    tree, formula = [], []
    for t in times:
        price = call_european_binomial("d", s0, k, r, sigma, t, GREEK_STEPS)
        bumped = call_european_binomial("d", s0 + EPSILON, k, r, sigma, t, GREEK_STEPS)
        tree.append((bumped - price) / EPSILON)
        price_bs = call_price_bs(r, sigma, t, s0, k)
        formula.append((call_price_bs(r, sigma, t, s0 + EPSILON, k) - price_bs) / EPSILON)
    return DeltaPath(np.asarray(times), np.asarray(tree), np.asarray(formula))


def put_prices() -> PutPrices:
    """European and American puts for spots 80, 84, ..., 120."""
    r, sigma, k, t, steps = 0.05, 0.3, 100.0, 1.0, 200
    spots = 80.0 + 4.0 * np.arange(11)
    european = [put_european_binomial("b", float(s), k, r, sigma, t, steps) for s in spots]
    american = [put_american_binomial("b", float(s), k, r, sigma, t, steps) for s in spots]
    return PutPrices(spots, np.asarray(european), np.asarray(american))


def trinomial_prices() -> TrinomialPrices:
    """Trinomial call prices for both methods across step counts."""
    method_a = [
        call_european_trinomial(TrinomialMethod.A, _S0, _K, _R, _SIGMA, _T, n)
        for n in TRINOMIAL_STEPS
    ]
    method_b = [
        call_european_trinomial(TrinomialMethod.B, _S0, _K, _R, _SIGMA, _T, n)
        for n in TRINOMIAL_STEPS
    ]
    return TrinomialPrices(
        black_scholes=call_price_bs(_R, _SIGMA, _T, _S0, _K),
        steps=TRINOMIAL_STEPS,
        method_a=np.asarray(method_a),
        method_b=np.asarray(method_b),
    )


def halton_price() -> HaltonPrice:
    """Call price from 1000 Halton points in bases 5 and 7."""
    return HaltonPrice(
        halton=call_european_lds(_S0, _K, _R, _SIGMA, _T, 1000, 5, 7),
        black_scholes=call_price_bs(_R, _SIGMA, _T, _S0, _K),
    )


def _banner(label: str) -> None:
    print(f"#################################### {label} ###################################")


def main(argv: list[str] | None = None) -> int:
    """Run every question and print the results."""
    parser = argparse.ArgumentParser(description="Binomial and trinomial tree exercises.")
    parser.add_argument("--out-dir", type=Path, default=None, help="directory for CSV output")
    parser.add_argument("--returns", type=Path, default=None, help="file of monthly returns")
    args = parser.parse_args(argv)
    out_dir: Path | None = args.out_dir
    if out_dir is not None:
        out_dir.mkdir(parents=True, exist_ok=True)

    _banner("Qn 1")
    conv = binomial_convergence()
    print(f"Option price using Black Scholes: {conv.black_scholes:g}")
    for method, prices in conv.prices.items():
        for n, price in zip(conv.steps, prices):
            print(f"Option Price for method ({method.value}), n = {n} is: {price:g}")

    _banner("Qn 2")
    if args.returns is None:
        print("No returns file given; skipped.")
    else:
        goog = goog_prices(args.returns)
        print(f"Volatility based on calculation is: {goog.sigma:g}")
        print(f"Estimate the option price on Jan 2020: {goog.price:g}")
        print(f"Estimate the option price with Volatility equal to 20.4%: {goog.price_low_vol:g}")

    _banner("Qn 3")
    greeks = greeks_table()
    names = ("Delta", "Theta", "Gamma", "Vega", "Rho")
    for name, values in zip(names, greeks.binomial.columns()):
        print(f"{name} (binomial): " + ", ".join(f"{v:g}" for v in values))
    for name, values in zip(names, greeks.black_scholes.columns()):
        print(f"{name} (Black Scholes): " + ", ".join(f"{v:g}" for v in values))
    deltas = delta_over_time()
    print("Delta over time (binomial): " + ", ".join(f"{v:g}" for v in deltas.binomial))
    if out_dir is not None:
        write_matrix_csv(greeks.binomial.columns(), out_dir / "Qn3.csv")
        write_matrix_csv(greeks.black_scholes.columns(), out_dir / "Qn3_bs.csv")
        write_array_csv(deltas.binomial, out_dir / "Qn3_delta_t.csv")
        write_array_csv(deltas.black_scholes, out_dir / "Qn3_delta_t_bs.csv")

    _banner("Qn 4")
    puts = put_prices()
    print("European put: " + ", ".join(f"{v:g}" for v in puts.european))
    print("American put: " + ", ".join(f"{v:g}" for v in puts.american))
    if out_dir is not None:
        write_array_csv(puts.european, out_dir / "Qn4EuroPut.csv")
        write_array_csv(puts.american, out_dir / "Qn4AmericanPut.csv")

    _banner("Qn 5")
    tri = trinomial_prices()
    print(f"Option Price Using Black Scholes: {tri.black_scholes:g}")
    print("Trinomial (a): " + ", ".join(f"{v:g}" for v in tri.method_a))
    print("Trinomial (b): " + ", ".join(f"{v:g}" for v in tri.method_b))
    if out_dir is not None:
        write_array_csv(tri.method_a, out_dir / "Qn5A.csv")
        write_array_csv(tri.method_b, out_dir / "Qn5B.csv")

    _banner("Qn 6")
    halton = halton_price()
    print(f"Option Price using Halton's Low Discrepancy Sequence: {halton.halton:g}")
    print(f"Option Price using Black Scholes as Comparison: {halton.black_scholes:g}")
    return 0