"""
Distribution families used by the data generating processes.

Usage:
    from pysimstudy.distributions import Normal, ChiSquare, Pareto, sample

    rng = np.random.default_rng(1)
    x = sample(Pareto(shape=1.5), 200, rng)
    ChiSquare(3).ppf(0.5)
"""

from pysimstudy.distributions.families import (
    Cauchy,
    ChiSquare,
    Distribution,
    DistributionFamily,
    Normal,
    Pareto,
    StudentT,
    Uniform,
    quantile,
    sample,
)

__all__ = [
    "Distribution",
    "DistributionFamily",
    "Normal",
    "StudentT",
    "ChiSquare",
    "Pareto",
    "Cauchy",
    "Uniform",
    "sample",
    "quantile",
]
