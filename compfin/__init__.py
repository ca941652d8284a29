"""Random number generation, simulation and option pricing for computational finance."""

__version__ = "0.1.0"

__all__ = [
    "stats",
    "generators",
    "paths",
    "pricing",
    "hw1",
    "hw2",
    "hw4",
    "final_exam",
]