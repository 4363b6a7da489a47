"""
Distribution families for data generating processes.

A closed set of frozen dataclasses, one per family, each carrying its own
parameter payload. Samplers draw from a numpy Generator; quantiles come
from scipy.stats. The engine only ever calls the shared interface
(sample, ppf, has_finite_variance, label), so a new family is one new
subclass plus one DistributionFamily member.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy import stats as sp_stats

from pysimstudy.core.exceptions import ValidationError


class DistributionFamily(Enum):
    NORMAL = "normal"
    STUDENT_T = "student_t"
    CHI_SQUARE = "chi_square"
    PARETO = "pareto"
    CAUCHY = "cauchy"
    UNIFORM = "uniform"


def _check_positive(value: float, name: str, family: str) -> None:
    if not (isinstance(value, numbers.Real) and math.isfinite(value) and value > 0):
        raise ValidationError(f"{family}: {name} must be positive and finite, got {value!r}")


def _check_finite(value: float, name: str, family: str) -> None:
    if not (isinstance(value, numbers.Real) and math.isfinite(value)):
        raise ValidationError(f"{family}: {name} must be finite, got {value!r}")


@dataclass(frozen=True)
class Distribution:
    """
    Base class for all families.

    Subclasses define `family`, `sample`, `_frozen` (the scipy.stats
    frozen distribution used for quantiles), `mean` and
    `has_finite_variance`.
    """

    @property
    def family(self) -> DistributionFamily:
        raise NotImplementedError

    @property
    def params(self) -> dict[str, float]:
        """Parameter payload as a name -> value mapping."""
        return {k: float(v) for k, v in self.__dict__.items() if not isinstance(v, bool)}

    @property
    def label(self) -> str:
        args = ", ".join(f"{v:g}" for v in self.params.values())
        return f"{type(self).__name__}({args})"

    @property
    def mean(self) -> float:
        raise NotImplementedError

    @property
    def has_finite_variance(self) -> bool:
        raise NotImplementedError

    def sample(self, n: int, rng: np.random.Generator) -> NDArray[np.floating[Any]]:
        raise NotImplementedError

    def _frozen(self):
        raise NotImplementedError

    def ppf(self, q: float) -> float:
        """Quantile function (inverse CDF) at probability q."""
        return float(self._frozen().ppf(q))


@dataclass(frozen=True)
class Normal(Distribution):
    loc: float = 0.0
    scale: float = 1.0

    def __post_init__(self):
        _check_finite(self.loc, "loc", "Normal")
        _check_positive(self.scale, "scale", "Normal")

    @property
    def family(self) -> DistributionFamily:
        return DistributionFamily.NORMAL

    @property
    def mean(self) -> float:
        return float(self.loc)

    @property
    def has_finite_variance(self) -> bool:
        return True

    def sample(self, n, rng):
        return rng.normal(self.loc, self.scale, size=n)

    def _frozen(self):
        return sp_stats.norm(loc=self.loc, scale=self.scale)


@dataclass(frozen=True)
class StudentT(Distribution):
    df: float

    def __post_init__(self):
        _check_positive(self.df, "df", "StudentT")

    @property
    def family(self) -> DistributionFamily:
        return DistributionFamily.STUDENT_T

    @property
    def mean(self) -> float:
        return 0.0 if self.df > 1 else math.nan

    @property
    def has_finite_variance(self) -> bool:
        return self.df > 2

    def sample(self, n, rng):
        return rng.standard_t(self.df, size=n)

    def _frozen(self):
        return sp_stats.t(self.df)


@dataclass(frozen=True)
class ChiSquare(Distribution):
    """
    Chi-square with df degrees of freedom.

    With centered=True (default) draws are shifted by -df so that the
    mean is zero: a skewed error distribution for the mean test.
    """
    df: float
    centered: bool = True

    def __post_init__(self):
        _check_positive(self.df, "df", "ChiSquare")

    @property
    def family(self) -> DistributionFamily:
        return DistributionFamily.CHI_SQUARE

    @property
    def label(self) -> str:
        suffix = ", centered" if self.centered else ""
        return f"ChiSquare({self.df:g}{suffix})"

    @property
    def mean(self) -> float:
        return 0.0 if self.centered else float(self.df)

    @property
    def has_finite_variance(self) -> bool:
        return True

    def sample(self, n, rng):
        draws = rng.chisquare(self.df, size=n)
        if self.centered:
            draws = draws - self.df
        return draws

    def _frozen(self):
        return sp_stats.chi2(self.df, loc=-self.df if self.centered else 0.0)


@dataclass(frozen=True)
class Pareto(Distribution):
    """
    Classic (type I) Pareto on [scale, inf).

    shape <= 1: infinite mean; 1 < shape <= 2: finite mean, infinite
    variance (shape 1.5 is the heavy-tailed regressor of the OLS design).
    """
    shape: float
    scale: float = 1.0

    def __post_init__(self):
        _check_positive(self.shape, "shape", "Pareto")
        _check_positive(self.scale, "scale", "Pareto")

    @property
    def family(self) -> DistributionFamily:
        return DistributionFamily.PARETO

    @property
    def mean(self) -> float:
        if self.shape <= 1:
            return math.inf
        return self.shape * self.scale / (self.shape - 1.0)

    @property
    def has_finite_variance(self) -> bool:
        return self.shape > 2

    def sample(self, n, rng):
        # numpy's pareto is the Lomax (shifted) form
        return (rng.pareto(self.shape, size=n) + 1.0) * self.scale

    def _frozen(self):
        return sp_stats.pareto(self.shape, scale=self.scale)


@dataclass(frozen=True)
class Cauchy(Distribution):
    loc: float = 0.0
    scale: float = 1.0

    def __post_init__(self):
        _check_finite(self.loc, "loc", "Cauchy")
        _check_positive(self.scale, "scale", "Cauchy")

    @property
    def family(self) -> DistributionFamily:
        return DistributionFamily.CAUCHY

    @property
    def mean(self) -> float:
        return math.nan

    @property
    def has_finite_variance(self) -> bool:
        return False

    def sample(self, n, rng):
        return self.loc + self.scale * rng.standard_cauchy(size=n)

    def _frozen(self):
        return sp_stats.cauchy(loc=self.loc, scale=self.scale)


@dataclass(frozen=True)
class Uniform(Distribution):
    low: float = 0.0
    high: float = 1.0

    def __post_init__(self):
        _check_finite(self.low, "low", "Uniform")
        _check_finite(self.high, "high", "Uniform")
        if not self.high > self.low:
            raise ValidationError(
                f"Uniform: high must exceed low, got low={self.low}, high={self.high}"
            )

    @property
    def family(self) -> DistributionFamily:
        return DistributionFamily.UNIFORM

    @property
    def mean(self) -> float:
        return 0.5 * (self.low + self.high)

    @property
    def has_finite_variance(self) -> bool:
        return True

    def sample(self, n, rng):
        return rng.uniform(self.low, self.high, size=n)

    def _frozen(self):
        return sp_stats.uniform(loc=self.low, scale=self.high - self.low)


def sample(
    distribution: Distribution,
    n: int,
    rng: np.random.Generator,
) -> NDArray[np.floating[Any]]:
    """Draw n i.i.d. values from distribution."""
    if not isinstance(distribution, Distribution):
        raise ValidationError(
            f"distribution must be a Distribution, got {type(distribution).__name__}"
        )
    return np.asarray(distribution.sample(n, rng), dtype=np.float64)


def quantile(distribution: Distribution, probability: float) -> float:
    """Quantile of distribution at probability in (0, 1)."""
    if not isinstance(distribution, Distribution):
        raise ValidationError(
            f"distribution must be a Distribution, got {type(distribution).__name__}"
        )
    if not (0.0 < probability < 1.0):
        raise ValidationError(f"probability must be in (0, 1), got {probability}")
    return distribution.ppf(probability)
