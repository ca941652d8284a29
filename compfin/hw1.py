"""Sampling exercises: uniform, discrete, binomial, exponential and normal variates."""

from __future__ import annotations

import argparse
import random
import time
from collections.abc import Iterable
from dataclasses import dataclass
from os import PathLike
from pathlib import Path

import numpy as np

from compfin.generators import box_muller, polar_marsaglia, rbinom, rexp, runif
from compfin.stats import mean, stdev, write_array_csv

SEED = 1234567890
BUILTIN_SEED = 1
SAMPLE_SIZE = 10000
NORMAL_SIZE = 5000
BINOMIAL_SIZE = 1000
BINOMIAL_TRIALS = 44
BINOMIAL_P = 0.64
EXPONENTIAL_MEAN = 1.5

_THRESHOLDS = np.array([0.3, 0.65, 0.85])
_OUTCOMES = np.array([-1, 0, 1, 2])


@dataclass(frozen=True)
class Summary:
    """Sample mean and standard deviation."""

    mean: float
    stdev: float


@dataclass(frozen=True)
class UniformComparison:
    """Congruential uniforms against the platform generator."""

    lgm: Summary
    builtin: Summary


@dataclass(frozen=True)
class BinomialResult:
    """Binomial draws and the estimated probability of at least 40 successes."""

    draws: np.ndarray
    probability: float


@dataclass(frozen=True)
class ExponentialResult:
    """Tail probabilities and summary of exponential draws."""

    prob_at_least_1: float
    prob_at_least_4: float
    summary: Summary


@dataclass(frozen=True)
class NormalComparison:
    """Box-Muller against Polar-Marsaglia on the same uniforms."""

    box_muller: Summary
    polar_marsaglia: Summary
    polar_count: int
    box_muller_seconds: float
    polar_seconds: float


def _summarise(values: Iterable[float]) -> Summary:
    data = list(values)
    return Summary(mean(data), stdev(data))


def _write(values: Iterable[float], out_dir: str | PathLike[str] | None, name: str) -> None:
    if out_dir is None:
        return
    directory = Path(out_dir)
    directory.mkdir(parents=True, exist_ok=True)
    write_array_csv(values, directory / name)


def discrete_sample(uniforms: Iterable[float]) -> np.ndarray:
    """Map uniforms to -1, 0, 1, 2 with probabilities 0.3, 0.35, 0.2, 0.15."""
    u = np.asarray(list(uniforms), dtype=float)
    if np.any((u < 0.0) | (u > 1.0)):
        raise ValueError("uniforms must lie in [0, 1]")
    return _OUTCOMES[np.searchsorted(_THRESHOLDS, u, side="left")]


def question1(
    uniforms: Iterable[float], out_dir: str | PathLike[str] | None = None
) -> UniformComparison:
    """Summarise the given uniforms and as many from the platform generator."""
    lgm = list(uniforms)
    rng = random.Random(BUILTIN_SEED)
    builtin = [rng.random() for _ in lgm]
    _write(lgm, out_dir, "Q1LGM.csv")
    _write(builtin, out_dir, "Q1BuiltIn.csv")
    return UniformComparison(_summarise(lgm), _summarise(builtin))


def question2(
    uniforms: Iterable[float], out_dir: str | PathLike[str] | None = None
) -> Summary:
    """Summary of the discrete distribution sampled from the uniforms."""
    samples = discrete_sample(uniforms)
    _write(samples, out_dir, "Q2Data.csv")
    return _summarise(samples)


def question3(out_dir: str | PathLike[str] | None = None) -> BinomialResult:
    """Binomial(44, 0.64) draws and the estimate of P(X >= 40)."""
    draws = rbinom(BINOMIAL_SIZE, BINOMIAL_TRIALS, BINOMIAL_P, SEED)
    _write(draws, out_dir, "Q3Data.csv")
    probability = float(np.count_nonzero(draws >= 40)) / BINOMIAL_SIZE
    return BinomialResult(draws, probability)


def question4(
    uniforms: Iterable[float], out_dir: str | PathLike[str] | None = None
) -> ExponentialResult:
    """Exponential draws with mean 1.5 and their tail probabilities."""
    draws = rexp(uniforms, EXPONENTIAL_MEAN)
    _write(draws, out_dir, "Q4Data.csv")
    n = len(draws)
    if n == 0:
        raise ValueError("no uniforms given")
    return ExponentialResult(
        prob_at_least_1=float(np.count_nonzero(draws >= 1)) / n,
        prob_at_least_4=float(np.count_nonzero(draws >= 4)) / n,
        summary=_summarise(draws),
    )


def question5(size: int, out_dir: str | PathLike[str] | None = None) -> NormalComparison:
    """Compare two normal generators on ``size`` shared uniforms."""
    uniforms = runif(size, SEED)

    start = time.perf_counter()
    bm = box_muller(uniforms)
    bm_seconds = time.perf_counter() - start
    _write(bm, out_dir, "Q5BoxMuller.csv")

    start = time.perf_counter()
    pm = polar_marsaglia(uniforms)
    pm_seconds = time.perf_counter() - start
    _write(pm, out_dir, "Q5PM.csv")

    return NormalComparison(
        box_muller=_summarise(bm),
        polar_marsaglia=_summarise(pm),
        polar_count=len(pm),
        box_muller_seconds=bm_seconds,
        polar_seconds=pm_seconds,
    )


def _banner(label: str) -> None:
    print(f"######################### {label} ################################")


def main(argv: list[str] | None = None) -> int:
    """Run every question and print the results."""
    parser = argparse.ArgumentParser(description="Random number generation exercises.")
    parser.add_argument("--out-dir", type=Path, default=None, help="directory for CSV output")
    args = parser.parse_args(argv)

    uniforms = runif(SAMPLE_SIZE, SEED)

    _banner("QN1")
    q1 = question1(uniforms, args.out_dir)
    print(f"Mean of randomly generated number: {q1.lgm.mean:g}")
    print(f"Standard Deviation of randomly generated number: {q1.lgm.stdev:g}")
    print(f"Mean of randomly generated number Using Built in Function: {q1.builtin.mean:g}")
    print(
        "Standard Deviation of randomly generated number Using Built in Function: "
        f"{q1.builtin.stdev:g}"
    )
    print()

    _banner("QN2")
    q2 = question2(uniforms, args.out_dir)
    print(f"Mean: {q2.mean:g}")
    print(f"Standard Deviation: {q2.stdev:g}")
    print()

    _banner("QN3")
    q3 = question3(args.out_dir)
    print(f"Probability that P(X>=40) is : {q3.probability:g}")

    _banner("QN4")
    q4 = question4(uniforms, args.out_dir)
    print(f"Probability that P(X>=1) is : {q4.prob_at_least_1:g}")
    print(f"Probability that P(X>=4) is : {q4.prob_at_least_4:g}")
    print(f"Mean of the simulated Exponential distribution is: {q4.summary.mean:g}")
    print(
        "Standard deviation of the simulated Exponential distribution is: "
        f"{q4.summary.stdev:g}"
    )

    _banner("QN5")
    q5 = question5(NORMAL_SIZE, args.out_dir)
    print("Simulation Standard Normal Distribution Using Box-Muller: ")
    print(f"Mean: {q5.box_muller.mean:g}")
    print(f"Standard deviation: {q5.box_muller.stdev:g}")
    print()
    print("Simulation Standard Normal Distribution Using Polar-Marsaglia: ")
    print(f"Number of values chosen: {q5.polar_count}")
    print(f"Mean: {q5.polar_marsaglia.mean:g}")
    print(f"Standard deviation: {q5.polar_marsaglia.stdev:g}")
    print()
    print(f"Simulation with data size: {NORMAL_SIZE}")
    print(f"Time taken for Box-Muller: {q5.box_muller_seconds * 1e6:.0f}")
    print(f"Time taken for Polar-Marsaglia: {q5.polar_seconds * 1e6:.0f}")
    return 0