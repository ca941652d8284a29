# compfin

Tools for computational finance: uniform, binomial, exponential and normal
random number generators, low-discrepancy (Halton) sequences, Wiener
processes and stock price paths. It also prices options by Monte Carlo
simulation, by Black–Scholes formulas and on binomial and trinomial trees.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Library overview

- `compfin.stats`: `mean`, `stdev` (sample, Bessel-corrected), `cov`,
  `corr`, two normal CDFs (`pnorm`, a polynomial approximation, and
  `pnorm_exact`, through the complementary error function), `dot`,
  `scale`, `shift`, and the CSV writers `write_array_csv` and
  `write_matrix_csv`.
- `compfin.generators`: the multiplicative congruential generator
  (`lgm_next`, `runif`), `rbinom`, `rexp`, `box_muller`,
  `box_muller_halton`, `polar_marsaglia`, `bivariate_normal_x`,
  `bivariate_normal_y`, `wiener_process` and `halton_sequence`.
- `compfin.paths`: matrices of antithetic Wiener increments
  (`wiener_increments`), geometric Brownian motion paths
  (`gbm_price_paths`) and row-wise `cum_sum`.
- `compfin.pricing`: Black–Scholes call and put prices (`call_price_bs`,
  `put_price_bs`, with a choice of normal CDF), Monte Carlo call prices
  (`call_price_simulation`, `call_antithetic`, `call_european_lds`),
  European and American binomial trees (`call_european_binomial`,
  `put_european_binomial`, `put_american_binomial`, with
  `BinomialMethod` A to D) and European trinomial trees
  (`call_european_trinomial`, with `TrinomialMethod` A and B).

A short example:

```python
from compfin.pricing import BinomialMethod, call_european_binomial, call_price_bs
from compfin.stats import pnorm_exact

tree = call_european_binomial(BinomialMethod.D, 32, 30, 0.05, 0.24, 0.5, 500)
exact = call_price_bs(0.05, 0.24, 0.5, 32, 30, pnorm_exact)
print(tree, exact)
```

## Exercise programs

Each set of exercises runs as a command and prints its results.

```
compfin-hw1     # uniform, discrete, binomial, exponential and normal sampling
compfin-hw2     # correlated normals, control variates, call prices, integrals
compfin-hw4     # binomial and trinomial trees, Greeks, puts, Halton pricing
compfin-final   # stopping sums, Heston Asian option, barriers, bond put, jumps
```

`compfin-hw1`, `compfin-hw2` and `compfin-hw4` take `--out-dir DIR`. When
it is given, they write CSV files of the simulated data and results into
that directory. `compfin-hw4` also takes `--returns FILE`, a file with one
monthly return per line, from which it estimates a volatility and prices a
long-dated call. Without that option it skips that question.
`compfin-final` takes no options.

The same computations are available as functions in `compfin.hw1`,
`compfin.hw2`, `compfin.hw4` and `compfin.final_exam`. They return
dataclasses or arrays and print nothing.

## What is not included

No command or module solves stochastic differential equations by Euler or
Milstein schemes. None computes Greeks by antithetic simulation, compares
truncation schemes for the Heston model, or integrates over two-dimensional
Halton points. The building blocks for these are in `compfin.generators` and
`compfin.pricing`, but the package does not put them together for you.