import math

import numpy as np
import pytest

from compfin.pricing import (
    BinomialMethod,
    TrinomialMethod,
    call_antithetic,
    call_european_binomial,
    call_european_lds,
    call_european_trinomial,
    call_price_bs,
    call_price_simulation,
    put_american_binomial,
    put_european_binomial,
    put_price_bs,
)
from compfin.stats import pnorm, pnorm_exact

R, SIGMA, S0, K, T = 0.05, 0.24, 32.0, 30.0, 0.5


def test_bs_worked_example():
    assert call_price_bs(0.1, 0.2, 0.5, 42.0, 40.0, pnorm_exact) == pytest.approx(4.76, abs=0.01)
    assert put_price_bs(0.1, 0.2, 0.5, 42.0, 40.0, pnorm_exact) == pytest.approx(0.81, abs=0.01)


@pytest.mark.parametrize("cdf", [pnorm, pnorm_exact])
@pytest.mark.parametrize("s0", [20.0, 30.0, 45.0])
def test_bs_put_call_parity(cdf, s0):
    call = call_price_bs(R, SIGMA, T, s0, K, cdf)
    put = put_price_bs(R, SIGMA, T, s0, K, cdf)
    assert call - put == pytest.approx(s0 - K * math.exp(-R * T), abs=1e-9)


def test_bs_polynomial_close_to_exact():
    approx = call_price_bs(R, SIGMA, T, S0, K)
    exact = call_price_bs(R, SIGMA, T, S0, K, pnorm_exact)
    assert approx == pytest.approx(exact, abs=1e-3)


def test_bs_at_expiry_is_intrinsic():
    assert call_price_bs(R, SIGMA, 0.0, 49.0, 50.0) == 0.0
    assert put_price_bs(R, SIGMA, 0.0, 49.0, 50.0) == pytest.approx(1.0)


def test_bs_invalid_inputs():
    with pytest.raises(ValueError):
        call_price_bs(R, 0.0, T, S0, K)
    with pytest.raises(ValueError):
        put_price_bs(R, SIGMA, -1.0, S0, K)


def test_call_price_simulation_properties():
    w = np.linspace(-5.0, 5.0, 41)
    payoffs = call_price_simulation(w, R, SIGMA, T, S0, K)
    assert payoffs.shape == w.shape
    assert np.all(payoffs >= 0.0)
    assert np.all(np.diff(payoffs) >= 0.0)
    assert payoffs[0] == 0.0


@pytest.mark.parametrize("method", ["a", "b", "c", "d"])
def test_binomial_converges_to_bs(method):
    bs = call_price_bs(R, SIGMA, T, S0, K, pnorm_exact)
    assert call_european_binomial(method, S0, K, R, SIGMA, T, 500) == pytest.approx(bs, abs=0.02)


@pytest.mark.parametrize("method", [BinomialMethod.A, BinomialMethod.B])
def test_binomial_put_call_parity(method):
    call = call_european_binomial(method, S0, K, R, SIGMA, T, 100)
    put = put_european_binomial(method, S0, K, R, SIGMA, T, 100)
    assert call - put == pytest.approx(S0 - K * math.exp(-R * T), abs=1e-8)


@pytest.mark.parametrize("s", [80.0, 92.0, 100.0, 120.0])
def test_american_put_at_least_european(s):
    euro = put_european_binomial("b", s, 100.0, 0.05, 0.3, 1.0, 200)
    american = put_american_binomial("b", s, 100.0, 0.05, 0.3, 1.0, 200)
    assert american >= euro - 1e-12


def test_american_put_exceeds_european_deep_in_the_money():
    euro = put_european_binomial("b", 60.0, 100.0, 0.05, 0.3, 1.0, 200)
    american = put_american_binomial("b", 60.0, 100.0, 0.05, 0.3, 1.0, 200)
    assert american > euro


@pytest.mark.parametrize("method", [TrinomialMethod.A, TrinomialMethod.B])
def test_trinomial_converges_to_bs(method):
    bs = call_price_bs(R, SIGMA, T, S0, K, pnorm_exact)
    assert call_european_trinomial(method, S0, K, R, SIGMA, T, 200) == pytest.approx(bs, abs=0.02)


def test_trinomial_methods_agree():
    a = call_european_trinomial("a", S0, K, R, SIGMA, T, 100)
    b = call_european_trinomial("b", S0, K, R, SIGMA, T, 100)
    assert a == pytest.approx(b, abs=0.01)


def test_unknown_methods_rejected():
    with pytest.raises(ValueError):
        call_european_binomial("e", S0, K, R, SIGMA, T, 10)
    with pytest.raises(ValueError):
        call_european_trinomial("c", S0, K, R, SIGMA, T, 10)


def test_lattice_requires_steps():
    with pytest.raises(ValueError):
        put_european_binomial("a", S0, K, R, SIGMA, T, 0)
    with pytest.raises(ValueError):
        call_european_trinomial("a", S0, K, R, SIGMA, T, 0)


def test_antithetic_close_to_bs():
    bs = call_price_bs(0.04, 0.2, 5.0, 88.0, 100.0, pnorm_exact)
    sim = call_antithetic(1234567890, 10000, 0.04, 0.2, 5.0, 88.0, 100.0)
    assert sim == pytest.approx(bs, abs=0.6)


def test_antithetic_is_deterministic():
    first = call_antithetic(42, 1000, R, SIGMA, T, S0, K)
    assert call_antithetic(42, 1000, R, SIGMA, T, S0, K) == first


def test_lds_close_to_bs():
    bs = call_price_bs(R, SIGMA, T, S0, K, pnorm_exact)
    assert call_european_lds(S0, K, R, SIGMA, T, 1000, 5, 7) == pytest.approx(bs, abs=0.25)


def test_lds_requires_points():
    with pytest.raises(ValueError):
        call_european_lds(S0, K, R, SIGMA, T, 0, 5, 7)