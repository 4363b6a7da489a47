"""
Linear regression design: y = b0 + b1 * x + u.

The regressor and the error are drawn independently from any two
distributions, e.g. a Pareto(1.5) regressor (finite mean, infinite
variance) with Normal or Cauchy errors. Samples are rows [y, x], so a
row resample keeps each (x, y) pair intact.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pysimstudy.core.compute.linalg.qr import ols_cpu
from pysimstudy.core.exceptions import (
    DegenerateSampleError,
    SingularMatrixError,
    ValidationError,
)
from pysimstudy.distributions.families import Distribution
from pysimstudy.dgp._common import StatisticResult, freeze_sample

Y_COLUMN = 0
X_COLUMN = 1


@dataclass(frozen=True)
class LinearRegressionGenerator:
    """
    Rows [y, x] from y = coefficients[0] + coefficients[1] * x + u.

    Attributes:
        regressor: Distribution of x
        error: Distribution of u, independent of x
        coefficients: True (intercept, slope)
    """
    regressor: Distribution
    error: Distribution
    coefficients: tuple[float, float] = (1.0, 1.0)

    def __post_init__(self):
        for name in ('regressor', 'error'):
            value = getattr(self, name)
            if not isinstance(value, Distribution):
                raise ValidationError(
                    f"{name} must be a Distribution, got {type(value).__name__}"
                )
        if len(self.coefficients) != 2:
            raise ValidationError(
                f"coefficients must be (intercept, slope), got {self.coefficients!r}"
            )

    @property
    def label(self) -> str:
        return f"x~{self.regressor.label}, u~{self.error.label}"

    @property
    def heavy_tailed(self) -> bool:
        return not (
            self.regressor.has_finite_variance and self.error.has_finite_variance
        )

    def generate(self, n: int, rng: np.random.Generator) -> NDArray[np.floating[Any]]:
        # regressor first, then error: fixed draw order keeps streams reproducible
        x = self.regressor.sample(n, rng)
        u = self.error.sample(n, rng)
        b0, b1 = self.coefficients
        y = b0 + b1 * x + u
        return freeze_sample(np.column_stack([y, x]))


class OLSTStatistic:
    """
    t statistic for one coefficient of an OLS fit with intercept.

    Solves the least-squares problem via QR, estimates the error
    variance with the (n - p) correction and forms

        t = (b_j - h) / sqrt(Var(b)_jj)

    with exact reference distribution Student-t(n - p).

    Args:
        coefficient: Index into (intercept, slope); default 1 = slope.
    """

    n_params = 2

    def __init__(self, coefficient: int = 1):
        if coefficient not in (0, 1):
            raise ValidationError(
                f"coefficient must be 0 (intercept) or 1 (slope), got {coefficient!r}"
            )
        self.coefficient = coefficient

    @property
    def min_sample_size(self) -> int:
        return self.n_params + 1

    def compute(self, sample: NDArray[np.floating[Any]], hypothesized: float) -> StatisticResult:
        y = sample[:, Y_COLUMN]
        X = np.column_stack([np.ones(sample.shape[0]), sample[:, X_COLUMN]])

        try:
            fit = ols_cpu(X, y)
        except SingularMatrixError as e:
            raise DegenerateSampleError(
                f"OLS design is singular: {e}", reason='singular'
            ) from e

        j = self.coefficient
        se = float(fit.std_errors()[j])
        if se == 0.0:
            raise DegenerateSampleError(
                "Residual variance is zero; t statistic undefined",
                reason='zero_variance',
            )

        estimate = float(fit.coefficients[j])
        return StatisticResult(
            estimate=estimate,
            statistic=(estimate - hypothesized) / se,
            std_error=se,
            df=float(fit.df_residual),
        )
