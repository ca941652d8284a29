[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "compfin"
version = "0.1.0"
description = "Random number generators, Monte Carlo simulation and lattice models for pricing options and other derivatives."
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "finance",
    "options",
    "monte-carlo",
    "black-scholes",
    "binomial-tree",
    "trinomial-tree",
    "halton",
    "heston",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Financial and Insurance Industry",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Investment",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
compfin-hw1 = "compfin.hw1:main"
compfin-hw2 = "compfin.hw2:main"
compfin-hw4 = "compfin.hw4:main"
compfin-final = "compfin.final_exam:main"

[tool.hatch.build.targets.wheel]
packages = ["compfin"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
